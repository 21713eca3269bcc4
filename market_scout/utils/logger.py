"""Logging utilities for Market Scout."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import get_config

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(log_level: Optional[str] = None, log_file: Optional[str] = None):
    """Setup logging configuration.

    Reports go to stdout, so every sink writes to stderr or a file.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file, empty string disables the file sink
    """
    config = get_config().logging

    logger.remove()

    if log_level is None:
        log_level = config.level
    if log_file is None:
        log_file = config.file

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=log_level, colorize=True)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_file,
            format=FILE_FORMAT,
            level=log_level,
            serialize=config.json_file,
            rotation=config.rotation,
            retention=config.retention,
            compression="zip",
            encoding="utf-8",
        )

    logger.debug(f"Logging initialized at {log_level} level")
