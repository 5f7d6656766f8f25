"""Centralized logging configuration.

Usage:
    from .logger import get_logger
    logger = get_logger(__name__)

Every module logger is a child of the `checkin_system` root logger, which
`setup_logging()` configures once (console handler, INFO or DEBUG).
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "checkin_system"
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(debug: bool = False, *, stream=None) -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Avoid duplicate handlers when create_app() runs more than once (tests).
    if not logger.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    # "src.checkin_system.checkin_system.badges.service" -> "checkin_system.badges.service"
    short = name.rsplit(f"{ROOT_LOGGER_NAME}.", 1)[-1]
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{short}")
