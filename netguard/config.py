"""
NetGuard 流量监控平台 - 配置管理

使用 Pydantic Settings 管理所有配置项，支持环境变量和 .env 文件
"""
from functools import lru_cache
from typing import List, Optional
import os

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ==================== 应用信息 ====================
    APP_NAME: str = "NetGuard Traffic Monitor"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # ==================== 服务地址 ====================
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # ==================== 数据库 ====================
    DATABASE_URL: str = "sqlite:///~/netguard/netguard.db"

    @property
    def database_url_expanded(self) -> str:
        """展开数据库 URL 中的 ~ 路径"""
        url = self.DATABASE_URL
        if url.startswith("sqlite:///~"):
            path = url[10:]  # 去掉 sqlite:///
            return f"sqlite:///{os.path.expanduser(path)}"
        return url

    # ==================== 会话 ====================
    SESSION_COOKIE_NAME: str = "netguard_session"
    SESSION_TTL_MINUTES: int = 60 * 24
    SESSION_COOKIE_SECURE: bool = False
    SESSION_COOKIE_SAMESITE: str = "lax"
    # 过期会话的批量清理间隔（随新建会话触发）
    SESSION_PURGE_INTERVAL_SECONDS: int = 300

    # ==================== 密码哈希 ====================
    BCRYPT_ROUNDS: int = 12

    # ==================== 请求来源 ====================
    # 位于反向代理之后时才信任 X-Forwarded-For
    TRUST_PROXY: bool = False

    # ==================== CORS ====================
    CORS_ORIGINS: str = "*"

    @property
    def cors_origins_list(self) -> List[str]:
        """解析 CORS 源列表"""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    # ==================== 日志 ====================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # ==================== 初始管理员 ====================
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"
    DEFAULT_ADMIN_EMAIL: str = "admin@example.com"

    # ==================== 分页 ====================
    DEFAULT_PAGE_SIZE: int = 50
    MAX_PAGE_SIZE: int = 200


@lru_cache()
def get_settings() -> Settings:
    """获取配置单例"""
    return Settings()


# 便捷访问
settings = get_settings()
