# modelstate/runtime/logging.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""Logging configuration helpers."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import List, Optional, Union

LOGGER_NAME = "modelstate"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: Union[int, str] = "INFO",
    console: bool = True,
    filepath: Optional[Union[Path, str]] = None,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """Attach handlers to the package logger and return it."""

    log_level = level if isinstance(level, int) else getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(LOGGER_NAME)

    handlers: List[logging.Handler] = []
    if filepath is not None:
        log_path = Path(filepath).expanduser().resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                filename=log_path,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        )
    if console:
        handlers.append(logging.StreamHandler())

    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(_build_formatter())
        logger.addHandler(handler)
    logger.setLevel(log_level)
    return logger


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
