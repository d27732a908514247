"""
NetGuard 流量监控平台 - 告警服务

状态只能单向流转: pending/processing -> resolved | dismissed，不支持重新打开
"""
import logging
from typing import Optional

from sqlalchemy import and_, desc, func, select
from sqlalchemy.orm import Session

from netguard.core.exceptions import ErrorCodes, NotFound, ValidationFailed
from netguard.database import utcnow
from netguard.models import Alert, AlertSeverity, AlertStatus, User
from netguard.schemas.alert import AlertCreate, AlertStats

logger = logging.getLogger(__name__)


class AlertService:
    """告警查询与处置"""

    @staticmethod
    def list_filtered(
        db: Session,
        page: int = 1,
        limit: int = 50,
        severity: Optional[AlertSeverity] = None,
        status: Optional[AlertStatus] = None,
    ) -> tuple[list[Alert], int]:
        """分页查询，按创建时间倒序"""
        conditions = []
        if severity:
            conditions.append(Alert.severity == severity.value)
        if status:
            conditions.append(Alert.status == status.value)

        count_stmt = select(func.count(Alert.id))
        stmt = select(Alert).order_by(desc(Alert.created_at), desc(Alert.id))
        if conditions:
            count_stmt = count_stmt.where(and_(*conditions))
            stmt = stmt.where(and_(*conditions))

        total = db.execute(count_stmt).scalar() or 0
        alerts = db.execute(stmt.offset((page - 1) * limit).limit(limit)).scalars().all()
        return list(alerts), total

    @staticmethod
    def recent(db: Session, limit: int = 10) -> list[Alert]:
        stmt = select(Alert).order_by(desc(Alert.created_at), desc(Alert.id)).limit(limit)
        return list(db.execute(stmt).scalars().all())

    @staticmethod
    def stats(db: Session) -> AlertStats:
        """待处理告警按级别计数 + 已解决总数"""
        stats = AlertStats()
        rows = db.execute(
            select(Alert.severity, func.count(Alert.id))
            .where(Alert.status == AlertStatus.PENDING.value)
            .group_by(Alert.severity)
        ).all()
        for severity, count in rows:
            if severity in AlertStats.model_fields:
                setattr(stats, severity, count)

        stats.resolved = db.execute(
            select(func.count(Alert.id)).where(Alert.status == AlertStatus.RESOLVED.value)
        ).scalar() or 0
        return stats

    @staticmethod
    def count_pending(db: Session) -> int:
        return db.execute(
            select(func.count(Alert.id)).where(Alert.status == AlertStatus.PENDING.value)
        ).scalar() or 0

    @staticmethod
    def get_or_404(db: Session, alert_id: int) -> Alert:
        alert = db.get(Alert, alert_id)
        if alert is None:
            raise NotFound("告警不存在")
        return alert

    @staticmethod
    def close(db: Session, alert: Alert, target: AlertStatus, user: User) -> bool:
        """
        关闭告警（解决或忽略）

        Returns:
            状态是否发生变化；已处于目标状态时不做任何修改

        Raises:
            ValidationFailed: 告警已以另一种方式关闭
        """
        current = AlertStatus(alert.status)
        if current == target:
            return False
        if current.is_closed:
            raise ValidationFailed(
                f"告警已处于 {current.value} 状态，无法变更为 {target.value}",
                code=ErrorCodes.INVALID_STATE,
            )

        now = utcnow()
        alert.status = target.value
        alert.resolved_by = user.id
        alert.resolved_at = now
        alert.updated_at = now
        db.commit()
        db.refresh(alert)
        return True

    @staticmethod
    def create(db: Session, data: AlertCreate) -> Alert:
        alert = Alert(
            title=data.title,
            description=data.description,
            severity=data.severity.value,
            status=AlertStatus.PENDING.value,
            source_ip=data.source_ip,
            rule_id=data.rule_id,
            alert_metadata=data.metadata,
        )
        db.add(alert)
        db.commit()
        db.refresh(alert)
        logger.info("Alert %s raised: %s [%s]", alert.id, alert.title, alert.severity)
        return alert
