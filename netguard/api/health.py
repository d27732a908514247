"""NetGuard 流量监控平台 - 健康检查"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from netguard.config import settings
from netguard.core.session_manager import session_manager
from netguard.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """存活检查 + 数据库连通性"""
    try:
        db.execute(text("SELECT 1"))
        database = "healthy"
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        database = "unhealthy"

    return {
        "status": "healthy" if database == "healthy" else "unhealthy",
        "version": settings.APP_VERSION,
        "database": database,
        "activeSessions": session_manager.count(),
    }
