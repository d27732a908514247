"""
NetGuard 流量监控平台 - 日志配置

所有模块通过 logging.getLogger(__name__) 输出，启动时调用一次 setup_logging
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

DEFAULT_FORMAT = "[%(asctime)s] [NETGUARD] %(levelname)s %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    配置根日志记录器

    Args:
        level: 日志级别（名称或数值）
        log_file: 可选的日志文件路径
        format_string: 自定义格式

    Returns:
        netguard 包级日志记录器
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    format_string = format_string or DEFAULT_FORMAT

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(logging.Formatter(format_string, datefmt=DATE_FORMAT))
        logging.getLogger().addHandler(file_handler)

    logger = logging.getLogger("netguard")
    logger.info("Logging initialized (level=%s)", logging.getLevelName(level))
    return logger
