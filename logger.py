import logging
import sys
from typing import Optional
from config import get_config


def setup_logger(
    name: Optional[str] = None, level: Optional[str] = None
) -> logging.Logger:
    """Configure a logger from the active settings."""
    config = get_config()

    log_level = level or config.LOG_LEVEL
    formatter = logging.Formatter(config.LOG_FORMAT)

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper()))

    # 既存のハンドラーをクリア
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # 本番環境ではファイルにも残す
    if log_level.upper() in ["WARNING", "ERROR"]:
        file_handler = logging.FileHandler("app.log")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return setup_logger(name)
