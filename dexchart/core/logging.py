import sys
import logging
from typing import Optional

from dexchart.config.settings import settings


JSON_FORMAT = '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# 第三方库 logger -> 级别
QUIET_LOGGERS = {
    "uvicorn": logging.INFO,
    "sqlalchemy.engine": logging.WARNING,
    "aiosqlite": logging.WARNING,
}


def setup_logging(level: Optional[str] = None, json_format: Optional[bool] = None) -> None:
    """配置日志系统

    Args:
        level: 日志级别，默认读取 LOG_LEVEL
        json_format: 是否输出 JSON 行，默认读取 LOG_JSON_FORMAT
    """
    level = level or settings.LOG_LEVEL
    if json_format is None:
        json_format = settings.LOG_JSON_FORMAT

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # 重复调用时替换而不是叠加 handler
    root_logger.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(JSON_FORMAT if json_format else TEXT_FORMAT))
    root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").handlers = []  # 避免 uvicorn 重复处理
    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


logger = logging.getLogger("dexchart")
