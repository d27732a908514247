"""
NetGuard 流量监控平台 - 认证与用户 Schema
"""
from datetime import datetime
from typing import Optional

from pydantic import Field

from netguard.models.user import User, UserRole
from netguard.schemas.base import CamelModel

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"


class LoginRequest(CamelModel):
    """登录请求"""
    username: str = Field(..., min_length=1, max_length=50, description="用户名")
    password: str = Field(..., min_length=1, description="密码")


class UserInfo(CamelModel):
    """用户信息（不含密码哈希）"""
    id: int
    username: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: UserRole
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    @classmethod
    def from_model(cls, user: User) -> "UserInfo":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
            last_login=user.last_login,
        )


class LoginResponse(CamelModel):
    """登录响应"""
    message: str
    user: UserInfo


class UserCreate(CamelModel):
    """创建用户请求"""
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)
    email: Optional[str] = Field(None, max_length=100, pattern=EMAIL_PATTERN)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    role: UserRole = UserRole.READONLY


class UserRoleUpdate(CamelModel):
    """修改角色请求"""
    role: UserRole


class UserStatusUpdate(CamelModel):
    """启用/停用请求"""
    is_active: bool
