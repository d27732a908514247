"""
NetGuard 流量监控平台 - API 路由聚合

所有业务接口挂在 /api 下；写接口与审计操作的对应关系见 netguard.schemas.audit
"""
from fastapi import APIRouter

from netguard.api import (
    alerts, audit_logs, auth, dashboard, detection_rules, devices, system_config, users
)

api_router = APIRouter()

# 认证相关
api_router.include_router(auth.router, prefix="/auth", tags=["认证"])

# 仪表盘
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["仪表盘"])

# 设备管理
api_router.include_router(devices.router, prefix="/devices", tags=["设备管理"])

# 告警管理
api_router.include_router(alerts.router, prefix="/alerts", tags=["告警管理"])

# 检测规则
api_router.include_router(detection_rules.router, prefix="/detection-rules", tags=["检测规则"])

# 用户管理
api_router.include_router(users.router, prefix="/users", tags=["用户管理"])

# 审计日志
api_router.include_router(audit_logs.router, prefix="/audit-logs", tags=["审计日志"])

# 系统配置
api_router.include_router(system_config.router, prefix="/system-config", tags=["系统配置"])
