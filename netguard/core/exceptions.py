"""
NetGuard 流量监控平台 - 业务异常

每个异常携带 HTTP 状态码与业务错误码，由 main.py 中注册的处理器统一转换为响应
"""
from typing import Any, Optional

from fastapi import status


class ErrorCodes:
    """业务错误码"""

    # 通用错误 (1xxx)
    UNKNOWN_ERROR = 1000
    VALIDATION_ERROR = 1001
    NOT_FOUND = 1002
    INTERNAL_ERROR = 1003
    CONFLICT = 1004
    INVALID_STATE = 1005

    # 认证错误 (2xxx)
    AUTH_INVALID_CREDENTIALS = 2001
    AUTH_SESSION_INVALID = 2002
    AUTH_PERMISSION_DENIED = 2005
    AUTH_SELF_MODIFICATION = 2006


class NetguardError(Exception):
    """业务异常基类"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: int = ErrorCodes.UNKNOWN_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        errors: Optional[list[dict[str, Any]]] = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.errors = errors

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"message": self.message, "code": self.code}
        if self.errors:
            body["errors"] = self.errors
        return body


class Unauthenticated(NetguardError):
    """未登录、会话无效或过期"""
    status_code = status.HTTP_401_UNAUTHORIZED
    code = ErrorCodes.AUTH_SESSION_INVALID


class Forbidden(NetguardError):
    """已登录但无权执行"""
    status_code = status.HTTP_403_FORBIDDEN
    code = ErrorCodes.AUTH_PERMISSION_DENIED


class ValidationFailed(NetguardError):
    """输入不合法、唯一约束冲突或非法状态转换"""
    status_code = status.HTTP_400_BAD_REQUEST
    code = ErrorCodes.VALIDATION_ERROR


class NotFound(NetguardError):
    """资源不存在"""
    status_code = status.HTTP_404_NOT_FOUND
    code = ErrorCodes.NOT_FOUND
