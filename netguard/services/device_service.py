"""
NetGuard 流量监控平台 - 设备服务
"""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from netguard.core.exceptions import NotFound, ValidationFailed
from netguard.models import Device, DeviceStatus
from netguard.schemas.device import DeviceCreate

DUPLICATE_IP_ERROR = {"field": "ipAddress", "message": "IP 地址已被其他设备使用"}


class DeviceService:
    """设备 CRUD"""

    @staticmethod
    def list_all(db: Session) -> list[Device]:
        stmt = select(Device).order_by(Device.created_at.desc(), Device.id.desc())
        return list(db.execute(stmt).scalars().all())

    @staticmethod
    def get_or_404(db: Session, device_id: int) -> Device:
        device = db.get(Device, device_id)
        if device is None:
            raise NotFound("设备不存在")
        return device

    @staticmethod
    def _ensure_ip_free(db: Session, ip_address: str, exclude_id: Optional[int] = None) -> None:
        stmt = select(Device.id).where(Device.ip_address == ip_address)
        if exclude_id is not None:
            stmt = stmt.where(Device.id != exclude_id)
        if db.execute(stmt).first() is not None:
            raise ValidationFailed("IP 地址已存在", errors=[DUPLICATE_IP_ERROR])

    @staticmethod
    def _commit(db: Session) -> None:
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationFailed("IP 地址已存在", errors=[DUPLICATE_IP_ERROR])

    @staticmethod
    def create(db: Session, data: DeviceCreate) -> Device:
        """新设备初始状态为 offline"""
        DeviceService._ensure_ip_free(db, data.ip_address)
        device = Device(
            name=data.name,
            ip_address=data.ip_address,
            device_type=data.device_type,
            protocol=data.protocol.value,
            description=data.description,
            status=DeviceStatus.OFFLINE.value,
        )
        db.add(device)
        DeviceService._commit(db)
        db.refresh(device)
        return device

    @staticmethod
    def update(db: Session, device: Device, data: DeviceCreate) -> Device:
        DeviceService._ensure_ip_free(db, data.ip_address, exclude_id=device.id)
        device.name = data.name
        device.ip_address = data.ip_address
        device.device_type = data.device_type
        device.protocol = data.protocol.value
        device.description = data.description
        DeviceService._commit(db)
        db.refresh(device)
        return device

    @staticmethod
    def delete(db: Session, device: Device) -> None:
        db.delete(device)
        db.commit()
