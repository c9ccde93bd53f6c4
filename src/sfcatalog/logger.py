"""
Logging configuration for sfcatalog.

Library modules only obtain named loggers through get_logger(); they never
configure handlers. An application embedding the catalog calls
set_global_logging() once at startup.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "sfcatalog"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def set_global_logging(
    level: str = "INFO",
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Route log records to stdout and, optionally, a file.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL); unknown
            names mean INFO
        format_string: Record format, DEFAULT_FORMAT if omitted
        log_file: Path of a file that receives the same records

    Returns:
        The 'sfcatalog' logger, set to the requested level
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=log_level,
        format=format_string or DEFAULT_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
    )

    logger = get_logger()
    logger.setLevel(log_level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return the logger called name, or the package logger when name is None.

    Modules pass __name__ so their loggers sit under 'sfcatalog'.
    """
    return logging.getLogger(name if name is not None else ROOT_LOGGER_NAME)
