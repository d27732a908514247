"""
NetGuard 流量监控平台 - 告警模型
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import String, Text, DateTime, Integer, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column

from netguard.database import Base, utcnow


class AlertSeverity(str, Enum):
    """告警级别"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AlertStatus(str, Enum):
    """告警状态"""
    PENDING = "pending"
    PROCESSING = "processing"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"

    @property
    def is_closed(self) -> bool:
        return self in (AlertStatus.RESOLVED, AlertStatus.DISMISSED)


class Alert(Base):
    """异常流量告警"""

    __tablename__ = "alerts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    severity: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        String(20), default=AlertStatus.PENDING.value, nullable=False, index=True
    )
    source_ip: Mapped[Optional[str]] = mapped_column(String(45), nullable=True)
    rule_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("detection_rules.id"), nullable=True
    )
    # "metadata" 是 Declarative 保留属性名，列名保持 metadata
    alert_metadata: Mapped[Optional[dict]] = mapped_column("metadata", JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)

    # resolved / dismissed 时才有值
    resolved_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    resolved_by: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )

    def __repr__(self):
        return f"<Alert {self.id}: {self.title} [{self.status}]>"
