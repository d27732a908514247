"""
NetGuard 流量监控平台 - 仪表盘 API（只读）
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from netguard.core.session_manager import SessionContext
from netguard.database import get_db
from netguard.dependencies import get_current_session
from netguard.schemas.alert import AlertInfo
from netguard.services.alert_service import AlertService
from netguard.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/stats")
def get_dashboard_stats(
    session: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """概览指标"""
    return DashboardService.stats(db).to_json()


@router.get("/traffic-chart")
def get_traffic_chart(
    hours: int = Query(24, ge=1, le=168, description="时间范围（小时）"),
    session: SessionContext = Depends(get_current_session),
):
    """流量趋势"""
    return DashboardService.traffic_chart(hours).to_json()


@router.get("/protocol-distribution")
def get_protocol_distribution(
    session: SessionContext = Depends(get_current_session),
):
    """协议分布"""
    return [share.to_json() for share in DashboardService.protocol_distribution()]


@router.get("/recent-alerts")
def get_recent_alerts(
    limit: int = Query(5, ge=1, le=50),
    session: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """最近告警"""
    return [AlertInfo.from_model(alert).to_json() for alert in AlertService.recent(db, limit)]


@router.get("/top-sources")
def get_top_sources(
    limit: int = Query(10, ge=1, le=100),
    session: SessionContext = Depends(get_current_session),
):
    """流量来源排行"""
    return [source.to_json() for source in DashboardService.top_sources(limit)]
