"""로거 설정 유틸리티.

Logging configuration helpers.
Console logging for module loggers; HTTP request logs go to Axiom
through the middleware when it is configured.
"""

import logging
import sys

from app.config import settings


def configure_logging() -> None:
    """루트 로거를 설정합니다.

    Configure the root logger with a single stdout handler.
    Safe to call more than once.
    """
    log_level: int = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    # 중복 핸들러 방지: Avoid duplicate handlers on reload
    if root_logger.hasHandlers():
        root_logger.handlers.clear()
    root_logger.addHandler(handler)

    # 서드파티 로거 소음 줄이기: Quieter third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """모듈 로거를 반환합니다 (Return a module logger)."""
    return logging.getLogger(name)
