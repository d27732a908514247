"""
NetGuard 流量监控平台 - 检测规则 Schema
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from netguard.models.alert import AlertSeverity
from netguard.models.detection_rule import DetectionRule
from netguard.schemas.base import CamelModel


class DetectionRuleCreate(CamelModel):
    """创建/更新规则请求"""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    rule_type: str = Field(..., min_length=1, max_length=100)
    conditions: dict[str, Any] = Field(default_factory=dict)
    severity: AlertSeverity
    is_active: bool = True


class DetectionRuleToggle(CamelModel):
    """启停请求，未给出 isActive 时取反"""
    is_active: Optional[bool] = None


class DetectionRuleInfo(CamelModel):
    """规则信息"""
    id: int
    name: str
    description: Optional[str] = None
    rule_type: str
    conditions: dict[str, Any]
    severity: AlertSeverity
    is_active: bool
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, rule: DetectionRule) -> "DetectionRuleInfo":
        return cls(
            id=rule.id,
            name=rule.name,
            description=rule.description,
            rule_type=rule.rule_type,
            conditions=rule.conditions or {},
            severity=rule.severity,
            is_active=rule.is_active,
            created_by=rule.created_by,
            created_at=rule.created_at,
            updated_at=rule.updated_at,
        )
