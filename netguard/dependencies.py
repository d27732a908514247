"""
NetGuard 流量监控平台 - FastAPI 依赖注入（鉴权关卡）

两级检查:
1. 认证: 必须存在有效会话，否则 401
2. 授权: 受限操作要求管理员角色（每次从数据库重新读取），否则 403

所有拒绝都发生在任何数据修改和审计写入之前
"""
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from netguard.config import settings
from netguard.core.exceptions import ErrorCodes, Forbidden, Unauthenticated
from netguard.core.session_manager import SessionContext, session_manager
from netguard.database import get_db
from netguard.models.user import User

UNAUTHENTICATED_MESSAGE = "未登录或会话已过期"


def get_session_token(request: Request) -> Optional[str]:
    """从 Cookie 中读取会话令牌"""
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_current_session(
    token: Optional[str] = Depends(get_session_token),
) -> SessionContext:
    """
    获取当前会话

    只做认证，不访问数据库；用于只读接口
    """
    context = session_manager.resolve(token)
    if context is None:
        raise Unauthenticated(UNAUTHENTICATED_MESSAGE)
    return context


def get_current_user(
    context: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db),
) -> User:
    """
    获取当前认证用户

    每次重新读取用户记录；账号已删除或停用时销毁会话并按未认证处理
    """
    user = db.get(User, context.user_id)
    if user is None or not user.is_active:
        session_manager.destroy(context.token)
        raise Unauthenticated(UNAUTHENTICATED_MESSAGE)
    return user


def get_current_admin(
    current_user: User = Depends(get_current_user),
) -> User:
    """
    获取当前管理员用户

    角色取自刚读取的用户记录，而不是会话缓存
    """
    if not current_user.is_admin:
        raise Forbidden("需要管理员权限")
    return current_user


def ensure_not_self(current_user: User, target_user_id: int, message: str) -> None:
    """禁止用户对自己的账号执行角色变更、停用或删除"""
    if current_user.id == target_user_id:
        raise Forbidden(message, code=ErrorCodes.AUTH_SELF_MODIFICATION)
