"""
NetGuard 流量监控平台 - 审计日志查询 API
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from netguard.config import settings
from netguard.core.exceptions import ValidationFailed
from netguard.core.session_manager import SessionContext
from netguard.database import get_db
from netguard.dependencies import get_current_session
from netguard.schemas.audit import AuditAction, AuditLogEntry, AuditLogQuery
from netguard.services.audit_service import AuditService

router = APIRouter()


def parse_date_param(value: Optional[str], field: str, end_of_day: bool = False) -> Optional[datetime]:
    """
    解析日期查询参数

    接受 ISO 8601 日期或日期时间；带时区的值转换为 UTC。
    结束日期只给出日期部分时包含当天全天。
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationFailed(
            "请求参数不合法",
            errors=[{"field": field, "message": "日期格式无效"}],
        )

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    if end_of_day and len(value) == 10:
        parsed = parsed + timedelta(days=1) - timedelta(microseconds=1)
    return parsed


@router.get("")
def list_audit_logs(
    response: Response,
    page: int = Query(1, ge=1, description="页码"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="每页数量"),
    user_id: Optional[int] = Query(None, alias="userId", description="用户ID"),
    action: Optional[AuditAction] = Query(None, description="操作类型"),
    start_date: Optional[str] = Query(None, alias="startDate", description="开始时间"),
    end_date: Optional[str] = Query(None, alias="endDate", description="结束时间"),
    session: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """
    查询审计日志

    按时间倒序，总数通过 X-Total-Count 响应头返回
    """
    query = AuditLogQuery(
        user_id=user_id,
        action=action,
        start_date=parse_date_param(start_date, "startDate"),
        end_date=parse_date_param(end_date, "endDate", end_of_day=True),
    )
    logs, total = AuditService.query(db, query, page=page, limit=limit)
    response.headers["X-Total-Count"] = str(total)
    return [AuditLogEntry.from_model(log).to_json() for log in logs]
