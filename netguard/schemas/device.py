"""
NetGuard 流量监控平台 - 设备 Schema
"""
import ipaddress
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from netguard.models.device import Device, DeviceStatus, ProtocolType
from netguard.schemas.base import CamelModel


class DeviceCreate(CamelModel):
    """创建/更新设备请求（状态由采集侧驱动，不接受客户端设置）"""
    name: str = Field(..., min_length=1, max_length=255)
    ip_address: str = Field(..., max_length=45)
    device_type: str = Field(..., min_length=1, max_length=100)
    protocol: ProtocolType
    description: Optional[str] = None

    @field_validator("ip_address")
    @classmethod
    def validate_ip(cls, value: str) -> str:
        try:
            return str(ipaddress.ip_address(value.strip()))
        except ValueError:
            raise ValueError("无效的 IP 地址")


class DeviceInfo(CamelModel):
    """设备信息"""
    id: int
    name: str
    ip_address: str
    device_type: str
    protocol: ProtocolType
    status: DeviceStatus
    description: Optional[str] = None
    last_seen: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, device: Device) -> "DeviceInfo":
        return cls(
            id=device.id,
            name=device.name,
            ip_address=device.ip_address,
            device_type=device.device_type,
            protocol=device.protocol,
            status=device.status,
            description=device.description,
            last_seen=device.last_seen,
            created_at=device.created_at,
            updated_at=device.updated_at,
        )
