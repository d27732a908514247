"""
NetGuard 流量监控平台 - FastAPI 应用入口
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from netguard.api.health import router as health_router
from netguard.api.router import api_router
from netguard.config import settings
from netguard.core.exceptions import ErrorCodes, NetguardError
from netguard.database import SessionLocal, init_db
from netguard.logging_config import setup_logging
from netguard.services.audit_service import check_audit_coverage
from netguard.services.user_service import UserService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    # ==================== 启动 ====================
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    logger.info("Starting %s v%s", settings.APP_NAME, settings.APP_VERSION)

    # 初始化数据库
    init_db()
    logger.info("Database initialized")

    # 创建默认管理员
    db = SessionLocal()
    try:
        UserService.ensure_default_admin(db)
    finally:
        db.close()

    yield

    # ==================== 关闭 ====================
    logger.info("Shutting down %s", settings.APP_NAME)


# 创建 FastAPI 应用
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="网络流量异常监控平台 API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# ==================== 中间件 ====================

# CORS 中间件（会话 Cookie 需要 allow_credentials）
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Total-Count"],
)

# ==================== 异常处理 ====================


@app.exception_handler(NetguardError)
async def netguard_error_handler(request: Request, exc: NetguardError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({"field": ".".join(loc), "message": error.get("msg", "")})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "message": "请求参数不合法",
            "code": ErrorCodes.VALIDATION_ERROR,
            "errors": errors,
        },
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "服务器内部错误", "code": ErrorCodes.INTERNAL_ERROR},
    )


# ==================== 路由注册 ====================

# 业务 API
app.include_router(api_router, prefix="/api")

# 健康检查路由
app.include_router(health_router)


@app.get("/")
async def root():
    """服务信息"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health",
    }


# 每个写接口必须有对应的审计操作
check_audit_coverage(app)
