"""
NetGuard 流量监控平台 - Models 模块
"""
from netguard.models.user import User, UserRole
from netguard.models.device import Device, DeviceStatus, ProtocolType
from netguard.models.alert import Alert, AlertSeverity, AlertStatus
from netguard.models.detection_rule import DetectionRule
from netguard.models.audit_log import AuditLog
from netguard.models.system_config import SystemConfig

__all__ = [
    "User",
    "UserRole",
    "Device",
    "DeviceStatus",
    "ProtocolType",
    "Alert",
    "AlertSeverity",
    "AlertStatus",
    "DetectionRule",
    "AuditLog",
    "SystemConfig",
]
