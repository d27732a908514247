"""
NetGuard 流量监控平台 - 告警 Schema
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from netguard.models.alert import Alert, AlertSeverity, AlertStatus
from netguard.schemas.base import CamelModel


class AlertCreate(CamelModel):
    """告警写入（检测侧/演示数据使用，无 HTTP 入口）"""
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    severity: AlertSeverity
    source_ip: Optional[str] = Field(None, max_length=45)
    rule_id: Optional[int] = None
    metadata: Optional[dict[str, Any]] = None


class AlertInfo(CamelModel):
    """告警信息"""
    id: int
    title: str
    description: str
    severity: AlertSeverity
    status: AlertStatus
    source_ip: Optional[str] = None
    rule_id: Optional[int] = None
    metadata: Optional[dict[str, Any]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[int] = None

    @classmethod
    def from_model(cls, alert: Alert) -> "AlertInfo":
        return cls(
            id=alert.id,
            title=alert.title,
            description=alert.description,
            severity=alert.severity,
            status=alert.status,
            source_ip=alert.source_ip,
            rule_id=alert.rule_id,
            metadata=alert.alert_metadata,
            created_at=alert.created_at,
            updated_at=alert.updated_at,
            resolved_at=alert.resolved_at,
            resolved_by=alert.resolved_by,
        )


class AlertStats(CamelModel):
    """待处理告警按级别计数，外加已解决总数"""
    low: int = 0
    medium: int = 0
    high: int = 0
    resolved: int = 0
