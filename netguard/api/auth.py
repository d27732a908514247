"""
NetGuard 流量监控平台 - 认证 API

登录成功后签发服务端会话，令牌通过 HttpOnly Cookie 交给客户端
"""
import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from netguard.config import settings
from netguard.core.exceptions import ErrorCodes, Unauthenticated
from netguard.core.session_manager import session_manager
from netguard.database import get_db
from netguard.dependencies import get_current_user, get_session_token
from netguard.models.user import User
from netguard.schemas.auth import LoginRequest, LoginResponse, UserInfo
from netguard.schemas.base import MessageResponse
from netguard.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()

# 用户不存在、已停用、密码错误共用同一提示
INVALID_CREDENTIALS_MESSAGE = "用户名或密码错误"


@router.post("/login")
def login(
    payload: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
):
    """
    用户登录

    验证用户名和密码，成功后设置会话 Cookie
    """
    user = UserService.verify(db, payload.username, payload.password)
    if user is None:
        logger.warning("Login failed for username=%s", payload.username)
        raise Unauthenticated(
            INVALID_CREDENTIALS_MESSAGE,
            code=ErrorCodes.AUTH_INVALID_CREDENTIALS,
        )

    UserService.record_login(db, user)
    context = session_manager.create(user.id, user.username, user.role)

    # 校验与建会话之间账号可能被停用，此时停用操作已清理过会话表
    db.refresh(user)
    if not user.is_active:
        session_manager.destroy(context.token)
        logger.warning("Login aborted for deactivated user %s", user.username)
        raise Unauthenticated(
            INVALID_CREDENTIALS_MESSAGE,
            code=ErrorCodes.AUTH_INVALID_CREDENTIALS,
        )

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=context.token,
        max_age=settings.SESSION_TTL_MINUTES * 60,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite=settings.SESSION_COOKIE_SAMESITE,
        path="/",
    )
    logger.info("User %s logged in", user.username)

    return LoginResponse(message="登录成功", user=UserInfo.from_model(user)).to_json()


@router.post("/logout")
def logout(
    response: Response,
    token: str = Depends(get_session_token),
):
    """
    用户登出

    销毁服务端会话并清除 Cookie；会话不存在时同样返回成功
    """
    context = session_manager.resolve(token)
    session_manager.destroy(token)
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    if context is not None:
        logger.info("User %s logged out", context.username)
    return MessageResponse(message="登出成功").to_json()


@router.get("/user")
def get_current_user_info(
    current_user: User = Depends(get_current_user),
):
    """获取当前用户信息"""
    return UserInfo.from_model(current_user).to_json()
