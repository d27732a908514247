"""
NetGuard 流量监控平台 - Services 模块
"""
from netguard.services.audit_service import AuditService, check_audit_coverage, get_client_info
from netguard.services.user_service import UserService
from netguard.services.device_service import DeviceService
from netguard.services.alert_service import AlertService
from netguard.services.rule_service import DetectionRuleService
from netguard.services.config_service import SystemConfigService
from netguard.services.dashboard_service import DashboardService

__all__ = [
    "AuditService",
    "check_audit_coverage",
    "get_client_info",
    "UserService",
    "DeviceService",
    "AlertService",
    "DetectionRuleService",
    "SystemConfigService",
    "DashboardService",
]
