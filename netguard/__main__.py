"""
NetGuard 流量监控平台 - 启动入口

python -m netguard
"""
import uvicorn

from netguard.config import settings


def main() -> None:
    uvicorn.run(
        "netguard.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
