"""공유 로깅 유틸리티"""

import logging
import os
import sys
from typing import Optional, Union


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    """레벨 해석 (None이면 LOG_LEVEL 환경변수, 잘못된 이름은 INFO)"""
    if isinstance(level, int):
        return level
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """로거 인스턴스 반환

    Args:
        name: 로거 이름
        level: 로그 레벨 (기본값: LOG_LEVEL 환경변수, 없으면 INFO)

    Returns:
        logging.Logger 인스턴스
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "[%(asctime)s] %(levelname)s [%(name)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)

    logger.setLevel(_resolve_level(level))
    return logger
