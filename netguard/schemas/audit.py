"""
NetGuard 流量监控平台 - 审计日志 Schema
"""
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from netguard.models.audit_log import AuditLog
from netguard.schemas.base import CamelModel


class AuditAction(str, Enum):
    """审计操作类型（封闭集合，每个写接口对应且仅对应一个）"""
    # 设备
    CREATE_DEVICE = "CREATE_DEVICE"
    UPDATE_DEVICE = "UPDATE_DEVICE"
    DELETE_DEVICE = "DELETE_DEVICE"

    # 告警
    RESOLVE_ALERT = "RESOLVE_ALERT"
    DISMISS_ALERT = "DISMISS_ALERT"

    # 检测规则
    CREATE_DETECTION_RULE = "CREATE_DETECTION_RULE"
    UPDATE_DETECTION_RULE = "UPDATE_DETECTION_RULE"
    TOGGLE_DETECTION_RULE = "TOGGLE_DETECTION_RULE"
    DELETE_DETECTION_RULE = "DELETE_DETECTION_RULE"

    # 用户
    CREATE_USER = "CREATE_USER"
    UPDATE_USER_ROLE = "UPDATE_USER_ROLE"
    UPDATE_USER_STATUS = "UPDATE_USER_STATUS"
    DELETE_USER = "DELETE_USER"

    # 系统配置
    UPDATE_SYSTEM_CONFIG = "UPDATE_SYSTEM_CONFIG"


class AuditResource(str, Enum):
    """审计资源类型"""
    DEVICE = "device"
    ALERT = "alert"
    DETECTION_RULE = "detection_rule"
    USER = "user"
    SYSTEM_CONFIG = "system_config"


# 写接口 (method, path) -> 审计操作
ENDPOINT_ACTIONS: dict[tuple[str, str], AuditAction] = {
    ("POST", "/api/devices"): AuditAction.CREATE_DEVICE,
    ("PUT", "/api/devices/{device_id}"): AuditAction.UPDATE_DEVICE,
    ("DELETE", "/api/devices/{device_id}"): AuditAction.DELETE_DEVICE,
    ("PUT", "/api/alerts/{alert_id}/resolve"): AuditAction.RESOLVE_ALERT,
    ("PUT", "/api/alerts/{alert_id}/dismiss"): AuditAction.DISMISS_ALERT,
    ("POST", "/api/detection-rules"): AuditAction.CREATE_DETECTION_RULE,
    ("PUT", "/api/detection-rules/{rule_id}"): AuditAction.UPDATE_DETECTION_RULE,
    ("PATCH", "/api/detection-rules/{rule_id}/toggle"): AuditAction.TOGGLE_DETECTION_RULE,
    ("DELETE", "/api/detection-rules/{rule_id}"): AuditAction.DELETE_DETECTION_RULE,
    ("POST", "/api/users"): AuditAction.CREATE_USER,
    ("PUT", "/api/users/{user_id}/role"): AuditAction.UPDATE_USER_ROLE,
    ("PUT", "/api/users/{user_id}/status"): AuditAction.UPDATE_USER_STATUS,
    ("DELETE", "/api/users/{user_id}"): AuditAction.DELETE_USER,
    ("PUT", "/api/system-config/{key}"): AuditAction.UPDATE_SYSTEM_CONFIG,
}

# 会话接口不落审计日志
UNAUDITED_ENDPOINTS: set[tuple[str, str]] = {
    ("POST", "/api/auth/login"),
    ("POST", "/api/auth/logout"),
}


# ==================== 日志记录 Schema ====================

class AuditLogEntry(CamelModel):
    """审计日志条目"""
    id: int
    user_id: Optional[int] = None
    username: Optional[str] = None
    action: str
    resource: str
    resource_id: Optional[str] = None
    details: Optional[dict[str, Any]] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    timestamp: datetime

    @classmethod
    def from_model(cls, log: AuditLog) -> "AuditLogEntry":
        return cls(
            id=log.id,
            user_id=log.user_id,
            username=log.username,
            action=log.action,
            resource=log.resource,
            resource_id=log.resource_id,
            details=log.details,
            ip_address=log.ip_address,
            user_agent=log.user_agent,
            timestamp=log.timestamp,
        )


# ==================== 查询 Schema ====================

class AuditLogQuery(BaseModel):
    """审计日志查询参数"""
    user_id: Optional[int] = Field(None, description="用户ID")
    action: Optional[AuditAction] = Field(None, description="操作类型")
    start_date: Optional[datetime] = Field(None, description="开始时间")
    end_date: Optional[datetime] = Field(None, description="结束时间")
