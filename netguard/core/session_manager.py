"""
NetGuard 流量监控平台 - 会话管理

服务端会话表：不透明令牌 -> 用户 ID 与缓存角色
会话状态: NONE -> ACTIVE -> (EXPIRED | TERMINATED)

只暴露 create / resolve / destroy 等接口，多实例部署时可替换为共享存储
"""
from __future__ import annotations

import logging
import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Optional

from netguard.config import settings
from netguard.database import utcnow

logger = logging.getLogger(__name__)


@dataclass
class SessionContext:
    """已认证会话"""
    token: str
    user_id: int
    username: str
    role: str
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utcnow()) >= self.expires_at


class SessionManager:
    """
    进程内会话表

    每个请求独立，同一用户允许多个并发会话
    """

    def __init__(
        self,
        ttl_minutes: int = settings.SESSION_TTL_MINUTES,
        purge_interval_seconds: int = settings.SESSION_PURGE_INTERVAL_SECONDS,
    ):
        self._sessions: Dict[str, SessionContext] = {}
        self._ttl = timedelta(minutes=ttl_minutes)
        self._purge_interval = timedelta(seconds=purge_interval_seconds)
        self._last_purge = utcnow()
        self._lock = threading.Lock()

    def create(self, user_id: int, username: str, role: str) -> SessionContext:
        """
        为已通过凭据校验的用户分配新会话

        Returns:
            新建的会话（token 交给客户端 Cookie）
        """
        now = utcnow()
        token = secrets.token_urlsafe(32)
        context = SessionContext(
            token=token,
            user_id=user_id,
            username=username,
            role=role,
            created_at=now,
            expires_at=now + self._ttl,
        )
        with self._lock:
            self._sessions[token] = context
            # 被遗弃的会话不会再被 resolve，按间隔顺带清理
            if now - self._last_purge >= self._purge_interval:
                purged = self._evict_expired(now)
                self._last_purge = now
                if purged:
                    logger.info("Purged %d expired session(s)", purged)
        logger.debug("Session created for user %s", username)
        return context

    def resolve(self, token: Optional[str]) -> Optional[SessionContext]:
        """
        查找会话

        令牌缺失、未知或已过期时返回 None，过期条目顺带清除
        """
        if not token:
            return None
        with self._lock:
            context = self._sessions.get(token)
            if context is None:
                return None
            if context.is_expired():
                del self._sessions[token]
                logger.debug("Session expired for user %s", context.username)
                return None
            return context

    def destroy(self, token: Optional[str]) -> bool:
        """销毁会话，会话不存在时不报错"""
        if not token:
            return False
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def destroy_user_sessions(self, user_id: int) -> int:
        """销毁某用户的全部会话（停用或删除账号时）"""
        with self._lock:
            tokens = [t for t, c in self._sessions.items() if c.user_id == user_id]
            for token in tokens:
                del self._sessions[token]
        if tokens:
            logger.info("Destroyed %d session(s) of user %s", len(tokens), user_id)
        return len(tokens)

    def update_role(self, user_id: int, role: str) -> None:
        """角色变更后刷新会话中的缓存角色"""
        with self._lock:
            for context in self._sessions.values():
                if context.user_id == user_id:
                    context.role = role

    def purge_expired(self) -> int:
        """清除所有过期会话"""
        now = utcnow()
        with self._lock:
            self._last_purge = now
            return self._evict_expired(now)

    def _evict_expired(self, now: datetime) -> int:
        expired = [t for t, c in self._sessions.items() if c.is_expired(now)]
        for token in expired:
            del self._sessions[token]
        return len(expired)

    def count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()


# 全局单例
session_manager = SessionManager()
