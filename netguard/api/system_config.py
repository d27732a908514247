"""
NetGuard 流量监控平台 - 系统配置 API（仅管理员）
"""
from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.orm import Session

from netguard.database import get_db
from netguard.dependencies import get_current_admin
from netguard.models.user import User
from netguard.schemas.audit import AuditAction, AuditResource
from netguard.schemas.system_config import SystemConfigInfo, SystemConfigUpdate
from netguard.services.audit_service import AuditService
from netguard.services.config_service import SystemConfigService

router = APIRouter()


@router.get("")
def list_system_config(
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """列出所有配置项"""
    return [SystemConfigInfo.from_model(config).to_json() for config in SystemConfigService.list_all(db)]


@router.put("/{key}")
def update_system_config(
    payload: SystemConfigUpdate,
    request: Request,
    key: str = Path(..., min_length=1, max_length=255, description="配置键"),
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """写入配置项（不存在则创建）"""
    config = SystemConfigService.upsert(db, key, payload.value, payload.description, current_user)
    info = SystemConfigInfo.from_model(config)

    AuditService.record(
        db,
        AuditAction.UPDATE_SYSTEM_CONFIG,
        AuditResource.SYSTEM_CONFIG,
        resource_id=key,
        details={"key": key, "value": info.value},
        user=current_user,
        request=request,
    )
    return info.to_json()
