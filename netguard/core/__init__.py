"""
NetGuard 流量监控平台 - Core 模块
"""
from netguard.core.security import (
    verify_password,
    get_password_hash,
)
from netguard.core.session_manager import session_manager, SessionManager, SessionContext
from netguard.core.exceptions import (
    ErrorCodes,
    NetguardError,
    Unauthenticated,
    Forbidden,
    ValidationFailed,
    NotFound,
)

__all__ = [
    # Security
    "verify_password",
    "get_password_hash",
    # Sessions
    "session_manager",
    "SessionManager",
    "SessionContext",
    # Errors
    "ErrorCodes",
    "NetguardError",
    "Unauthenticated",
    "Forbidden",
    "ValidationFailed",
    "NotFound",
]
