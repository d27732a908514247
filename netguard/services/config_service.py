"""
NetGuard 流量监控平台 - 系统配置服务
"""
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from netguard.models import SystemConfig, User


class SystemConfigService:
    """键值配置"""

    @staticmethod
    def list_all(db: Session) -> list[SystemConfig]:
        return list(db.execute(select(SystemConfig).order_by(SystemConfig.key)).scalars().all())

    @staticmethod
    def upsert(
        db: Session,
        key: str,
        value: Any,
        description: Optional[str],
        user: User,
    ) -> SystemConfig:
        """按 key 写入；已存在时覆盖值，未提供描述则保留原描述"""
        config = db.execute(
            select(SystemConfig).where(SystemConfig.key == key)
        ).scalar_one_or_none()

        if config is None:
            config = SystemConfig(key=key, value=value, description=description)
            db.add(config)
        else:
            config.value = value
            if description is not None:
                config.description = description
        config.updated_by = user.id
        db.commit()
        db.refresh(config)
        return config
