"""
统一的日志配置模块

日志目录结构：
/logs/
└── platform/      # 论坛服务日志
    ├── app.log       # 应用主日志
    ├── error.log     # 错误日志
    └── access.log    # HTTP访问日志
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path
from typing import Optional

# 统一使用项目顶层的 logs 目录
DEFAULT_LOG_DIR = Path(__file__).resolve().parents[2] / "logs"
LOG_DIR = Path(os.getenv("QA_FORUM_LOG_DIR", DEFAULT_LOG_DIR))
LOG_LEVEL = os.getenv("QA_FORUM_LOG_LEVEL", "INFO")
LOG_MAX_BYTES = int(os.getenv("QA_FORUM_LOG_MAX_BYTES", str(40 * 1024 * 1024)))
ACCESS_LOG_RETENTION_DAYS = int(os.getenv("QA_FORUM_ACCESS_LOG_DAYS", "14"))

PLATFORM_LOG_DIR = LOG_DIR / "platform"
PLATFORM_LOG_DIR.mkdir(parents=True, exist_ok=True)

DETAILED_FORMAT = (
    "%(asctime)s | "
    "PID:%(process)d | "
    "%(levelname)-8s | "
    "%(name)s | "
    "[%(filename)s:%(lineno)d:%(funcName)s] | "
    "%(message)s"
)

SIMPLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _file_handler(path: Path, level: int, max_bytes: int, backup_count: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(DETAILED_FORMAT, DATE_FORMAT))
    return handler


def setup_logging(log_level: str = LOG_LEVEL, log_dir: Optional[Path] = None) -> None:
    """配置根 logger：控制台 + app.log + error.log

    重复调用会先移除已有 handler，日志不会重复输出。
    """
    log_directory = log_dir or PLATFORM_LOG_DIR
    log_directory.mkdir(parents=True, exist_ok=True)
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(numeric_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT, DATE_FORMAT))
    root_logger.addHandler(console_handler)
    root_logger.addHandler(
        _file_handler(log_directory / "app.log", numeric_level, LOG_MAX_BYTES, backup_count=10)
    )
    root_logger.addHandler(
        _file_handler(log_directory / "error.log", logging.ERROR, LOG_MAX_BYTES // 2, backup_count=5)
    )

    # SQL 语句与 HTTP 客户端日志过于冗长
    for noisy in ("sqlalchemy.engine", "httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(f"Logging initialized: dir={log_directory}, level={log_level}")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def setup_access_logging(log_dir: Optional[Path] = None) -> logging.Logger:
    """配置 HTTP 访问日志，按天切分，独立于根 logger"""
    log_directory = log_dir or PLATFORM_LOG_DIR
    log_directory.mkdir(parents=True, exist_ok=True)
    access_logger = logging.getLogger("qa_forum.access")
    access_logger.setLevel(logging.INFO)
    access_logger.propagate = False
    for handler in access_logger.handlers[:]:
        access_logger.removeHandler(handler)
        handler.close()
    access_handler = TimedRotatingFileHandler(
        log_directory / "access.log",
        when="midnight",
        backupCount=ACCESS_LOG_RETENTION_DAYS,
        encoding="utf-8",
    )
    access_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT, DATE_FORMAT))
    access_logger.addHandler(access_handler)
    return access_logger


__all__ = [
    "setup_logging",
    "get_logger",
    "setup_access_logging",
    "LOG_DIR",
    "LOG_LEVEL",
    "PLATFORM_LOG_DIR",
]
