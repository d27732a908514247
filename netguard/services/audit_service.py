"""
NetGuard 流量监控平台 - 审计日志服务

每个写操作成功后追加一条审计记录；审计写入失败只记录错误日志，不回滚业务操作
"""
import logging
import threading
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from sqlalchemy import and_, desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from netguard.config import settings
from netguard.database import utcnow
from netguard.models import AuditLog, User
from netguard.schemas.audit import (
    ENDPOINT_ACTIONS,
    UNAUDITED_ENDPOINTS,
    AuditAction,
    AuditLogQuery,
    AuditResource,
)

logger = logging.getLogger(__name__)

MUTATING_METHODS = {"POST", "PUT", "PATCH", "DELETE"}

# 读取最新时间戳到提交之间串行执行
_record_lock = threading.Lock()


def get_client_info(request: Optional[Request]) -> tuple[Optional[str], Optional[str]]:
    """提取客户端 IP 与 User-Agent"""
    if request is None:
        return None, None

    # 获取真实 IP（考虑代理）
    forwarded = request.headers.get("X-Forwarded-For") if settings.TRUST_PROXY else None
    if forwarded:
        ip_address = forwarded.split(",")[0].strip()
    else:
        ip_address = request.client.host if request.client else None
    user_agent = request.headers.get("User-Agent")
    return ip_address, user_agent


class AuditService:
    """审计日志服务"""

    @staticmethod
    def record(
        db: Session,
        action: AuditAction,
        resource: AuditResource,
        resource_id: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        user: Optional[User] = None,
        request: Optional[Request] = None,
    ) -> Optional[AuditLog]:
        """
        追加一条审计日志

        Args:
            db: 数据库会话（业务操作已提交）
            action: 操作类型
            resource: 资源类型
            resource_id: 资源ID
            details: 详细信息
            user: 操作者，系统操作为 None
            request: HTTP 请求

        Returns:
            写入的日志；写入失败时返回 None
        """
        # 非法操作码属于编码错误，直接抛出
        action = AuditAction(action)
        resource = AuditResource(resource)

        user_id = user.id if user else None
        username = user.username if user else None
        ip_address, user_agent = get_client_info(request)

        try:
            with _record_lock:
                # 时间戳由服务端分配，且不早于已有最新记录
                timestamp = utcnow()
                latest = db.execute(select(func.max(AuditLog.timestamp))).scalar()
                if latest is not None and latest > timestamp:
                    timestamp = latest

                log_entry = AuditLog(
                    user_id=user_id,
                    username=username,
                    action=action.value,
                    resource=resource.value,
                    resource_id=str(resource_id) if resource_id is not None else None,
                    details=jsonable_encoder(details) if details is not None else None,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    timestamp=timestamp,
                )
                db.add(log_entry)
                db.commit()
            db.refresh(log_entry)
        except SQLAlchemyError:
            db.rollback()
            logger.exception(
                "Audit write failed: %s on %s/%s by %s",
                action.value, resource.value, resource_id, username or "system",
            )
            return None

        logger.info(
            "Audit: %s on %s/%s by %s",
            action.value, resource.value, resource_id, username or "system",
        )
        return log_entry

    @staticmethod
    def query(
        db: Session,
        query: AuditLogQuery,
        page: int = 1,
        limit: int = 50,
    ) -> tuple[list[AuditLog], int]:
        """
        查询审计日志，按时间倒序

        Returns:
            (当前页日志, 总数)
        """
        conditions = []
        if query.user_id is not None:
            conditions.append(AuditLog.user_id == query.user_id)
        if query.action:
            conditions.append(AuditLog.action == query.action.value)
        if query.start_date:
            conditions.append(AuditLog.timestamp >= query.start_date)
        if query.end_date:
            conditions.append(AuditLog.timestamp <= query.end_date)

        count_stmt = select(func.count(AuditLog.id))
        stmt = select(AuditLog).order_by(desc(AuditLog.timestamp), desc(AuditLog.id))
        if conditions:
            count_stmt = count_stmt.where(and_(*conditions))
            stmt = stmt.where(and_(*conditions))

        total = db.execute(count_stmt).scalar() or 0
        offset = (page - 1) * limit
        logs = db.execute(stmt.offset(offset).limit(limit)).scalars().all()
        return list(logs), total


def check_audit_coverage(app: FastAPI) -> None:
    """
    校验每个写接口都映射到一个审计操作

    接口清单取自 OpenAPI 文档（已展开嵌套路由及其前缀）；
    漏配的写接口属于设计缺陷，启动时直接失败
    """
    seen: set[tuple[str, str]] = set()
    unmapped: list[str] = []

    for path, operations in app.openapi().get("paths", {}).items():
        if not path.startswith("/api"):
            continue
        for method in operations:
            method = method.upper()
            if method not in MUTATING_METHODS:
                continue
            key = (method, path)
            seen.add(key)
            if key not in ENDPOINT_ACTIONS and key not in UNAUDITED_ENDPOINTS:
                unmapped.append(f"{method} {path}")

    stale = [f"{m} {p}" for (m, p) in ENDPOINT_ACTIONS if (m, p) not in seen]

    if unmapped or stale:
        raise RuntimeError(
            f"审计操作映射不完整: 未映射={sorted(unmapped)} 无对应接口={sorted(stale)}"
        )
