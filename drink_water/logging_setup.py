"""日志：轮转文件 + 控制台。启动时调用一次。"""
import logging
import sys
from logging.handlers import RotatingFileHandler

from drink_water.config import LOG_BACKUP_COUNT, LOG_FILE, LOG_MAX_BYTES, ensure_dirs


def setup_logging(level: int = logging.INFO) -> None:
    """给根日志加轮转文件与控制台输出；重复调用不会重复添加。"""
    ensure_dirs()
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        file_handler = RotatingFileHandler(
            LOG_FILE,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        root.addHandler(file_handler)
    if not any(type(h) is logging.StreamHandler for h in root.handlers):
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(formatter)
        console.setLevel(level)
        root.addHandler(console)
