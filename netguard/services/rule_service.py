"""
NetGuard 流量监控平台 - 检测规则服务

规则只是配置，启停不会触发任何求值
"""
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from netguard.core.exceptions import NotFound
from netguard.models import Alert, DetectionRule, User
from netguard.schemas.detection_rule import DetectionRuleCreate


class DetectionRuleService:
    """检测规则 CRUD"""

    @staticmethod
    def list_all(db: Session) -> list[DetectionRule]:
        stmt = select(DetectionRule).order_by(
            DetectionRule.created_at.desc(), DetectionRule.id.desc()
        )
        return list(db.execute(stmt).scalars().all())

    @staticmethod
    def get_or_404(db: Session, rule_id: int) -> DetectionRule:
        rule = db.get(DetectionRule, rule_id)
        if rule is None:
            raise NotFound("检测规则不存在")
        return rule

    @staticmethod
    def create(db: Session, data: DetectionRuleCreate, creator: User) -> DetectionRule:
        rule = DetectionRule(
            name=data.name,
            description=data.description,
            rule_type=data.rule_type,
            conditions=data.conditions,
            severity=data.severity.value,
            is_active=data.is_active,
            created_by=creator.id,
        )
        db.add(rule)
        db.commit()
        db.refresh(rule)
        return rule

    @staticmethod
    def update(db: Session, rule: DetectionRule, data: DetectionRuleCreate) -> DetectionRule:
        rule.name = data.name
        rule.description = data.description
        rule.rule_type = data.rule_type
        rule.conditions = data.conditions
        rule.severity = data.severity.value
        rule.is_active = data.is_active
        db.commit()
        db.refresh(rule)
        return rule

    @staticmethod
    def toggle(db: Session, rule: DetectionRule, is_active: Optional[bool] = None) -> DetectionRule:
        """设置启停状态，未指定时取反"""
        rule.is_active = (not rule.is_active) if is_active is None else is_active
        db.commit()
        db.refresh(rule)
        return rule

    @staticmethod
    def delete(db: Session, rule: DetectionRule) -> None:
        """删除规则，已产生的告警保留但解除关联"""
        db.execute(update(Alert).where(Alert.rule_id == rule.id).values(rule_id=None))
        db.delete(rule)
        db.commit()
