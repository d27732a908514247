"""
NetGuard 流量监控平台 - 告警管理 API
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from netguard.config import settings
from netguard.core.session_manager import SessionContext
from netguard.database import get_db
from netguard.dependencies import get_current_session, get_current_user
from netguard.models.alert import AlertSeverity, AlertStatus
from netguard.models.user import User
from netguard.schemas.alert import AlertInfo
from netguard.schemas.audit import AuditAction, AuditResource
from netguard.services.alert_service import AlertService
from netguard.services.audit_service import AuditService

router = APIRouter()


@router.get("")
def list_alerts(
    response: Response,
    page: int = Query(1, ge=1, description="页码"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="每页数量"),
    severity: Optional[AlertSeverity] = Query(None, description="告警级别"),
    status: Optional[AlertStatus] = Query(None, description="告警状态"),
    session: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """
    分页查询告警

    总数通过 X-Total-Count 响应头返回
    """
    alerts, total = AlertService.list_filtered(db, page, limit, severity, status)
    response.headers["X-Total-Count"] = str(total)
    return [AlertInfo.from_model(alert).to_json() for alert in alerts]


@router.get("/stats")
def get_alert_stats(
    session: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """告警统计"""
    return AlertService.stats(db).to_json()


def _close_alert(
    alert_id: int,
    target: AlertStatus,
    action: AuditAction,
    current_user: User,
    request: Request,
    db: Session,
) -> dict:
    alert = AlertService.get_or_404(db, alert_id)
    changed = AlertService.close(db, alert, target, current_user)
    info = AlertInfo.from_model(alert)

    # 重复关闭不产生新的审计记录
    if changed:
        AuditService.record(
            db,
            action,
            AuditResource.ALERT,
            resource_id=alert_id,
            details={"title": info.title, "severity": info.severity.value},
            user=current_user,
            request=request,
        )
    return info.to_json()


@router.put("/{alert_id}/resolve")
def resolve_alert(
    alert_id: int,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """标记告警为已解决"""
    return _close_alert(
        alert_id, AlertStatus.RESOLVED, AuditAction.RESOLVE_ALERT, current_user, request, db
    )


@router.put("/{alert_id}/dismiss")
def dismiss_alert(
    alert_id: int,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """忽略告警"""
    return _close_alert(
        alert_id, AlertStatus.DISMISSED, AuditAction.DISMISS_ALERT, current_user, request, db
    )
