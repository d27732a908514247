"""
NetGuard 流量监控平台 - Schemas 模块
"""
from netguard.schemas.base import CamelModel, MessageResponse
from netguard.schemas.auth import (
    LoginRequest,
    LoginResponse,
    UserInfo,
    UserCreate,
    UserRoleUpdate,
    UserStatusUpdate,
)
from netguard.schemas.device import DeviceCreate, DeviceInfo
from netguard.schemas.alert import AlertCreate, AlertInfo, AlertStats
from netguard.schemas.detection_rule import (
    DetectionRuleCreate,
    DetectionRuleToggle,
    DetectionRuleInfo,
)
from netguard.schemas.system_config import SystemConfigUpdate, SystemConfigInfo
from netguard.schemas.audit import (
    AuditAction,
    AuditResource,
    AuditLogEntry,
    AuditLogQuery,
    ENDPOINT_ACTIONS,
)
from netguard.schemas.dashboard import (
    DashboardStats,
    ChartDataset,
    TrafficChart,
    ProtocolShare,
    TrafficSource,
)

__all__ = [
    # Base
    "CamelModel",
    "MessageResponse",
    # Auth
    "LoginRequest",
    "LoginResponse",
    "UserInfo",
    "UserCreate",
    "UserRoleUpdate",
    "UserStatusUpdate",
    # Device
    "DeviceCreate",
    "DeviceInfo",
    # Alert
    "AlertCreate",
    "AlertInfo",
    "AlertStats",
    # Detection rule
    "DetectionRuleCreate",
    "DetectionRuleToggle",
    "DetectionRuleInfo",
    # System config
    "SystemConfigUpdate",
    "SystemConfigInfo",
    # Audit
    "AuditAction",
    "AuditResource",
    "AuditLogEntry",
    "AuditLogQuery",
    "ENDPOINT_ACTIONS",
    # Dashboard
    "DashboardStats",
    "ChartDataset",
    "TrafficChart",
    "ProtocolShare",
    "TrafficSource",
]
