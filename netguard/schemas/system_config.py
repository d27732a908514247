"""
NetGuard 流量监控平台 - 系统配置 Schema
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from netguard.models.system_config import SystemConfig
from netguard.schemas.base import CamelModel


class SystemConfigUpdate(CamelModel):
    """按 key 写入配置"""
    value: Any = Field(..., description="JSON 值")
    description: Optional[str] = None

    @field_validator("value")
    @classmethod
    def value_not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("配置值不能为空")
        return value


class SystemConfigInfo(CamelModel):
    """配置项"""
    id: int
    key: str
    value: Any
    description: Optional[str] = None
    updated_by: Optional[int] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, config: SystemConfig) -> "SystemConfigInfo":
        return cls(
            id=config.id,
            key=config.key,
            value=config.value,
            description=config.description,
            updated_by=config.updated_by,
            updated_at=config.updated_at,
        )
