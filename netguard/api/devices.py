"""
NetGuard 流量监控平台 - 设备管理 API
"""
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from netguard.core.session_manager import SessionContext
from netguard.database import get_db
from netguard.dependencies import get_current_session, get_current_user
from netguard.models.user import User
from netguard.schemas.audit import AuditAction, AuditResource
from netguard.schemas.device import DeviceCreate, DeviceInfo
from netguard.services.audit_service import AuditService
from netguard.services.device_service import DeviceService

router = APIRouter()


@router.get("")
def list_devices(
    session: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """列出所有设备"""
    return [DeviceInfo.from_model(device).to_json() for device in DeviceService.list_all(db)]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_device(
    payload: DeviceCreate,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """添加设备"""
    device = DeviceService.create(db, payload)
    info = DeviceInfo.from_model(device)

    AuditService.record(
        db,
        AuditAction.CREATE_DEVICE,
        AuditResource.DEVICE,
        resource_id=info.id,
        details={"deviceName": info.name, "ipAddress": info.ip_address},
        user=current_user,
        request=request,
    )
    return info.to_json()


@router.put("/{device_id}")
def update_device(
    device_id: int,
    payload: DeviceCreate,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """更新设备"""
    device = DeviceService.get_or_404(db, device_id)
    device = DeviceService.update(db, device, payload)
    info = DeviceInfo.from_model(device)

    AuditService.record(
        db,
        AuditAction.UPDATE_DEVICE,
        AuditResource.DEVICE,
        resource_id=device_id,
        details=payload.model_dump(by_alias=True, mode="json"),
        user=current_user,
        request=request,
    )
    return info.to_json()


@router.delete("/{device_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_device(
    device_id: int,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """删除设备"""
    device = DeviceService.get_or_404(db, device_id)
    details = {"deviceName": device.name, "ipAddress": device.ip_address}
    DeviceService.delete(db, device)

    AuditService.record(
        db,
        AuditAction.DELETE_DEVICE,
        AuditResource.DEVICE,
        resource_id=device_id,
        details=details,
        user=current_user,
        request=request,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
