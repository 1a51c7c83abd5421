"""
Logging Configuration and Utilities

Console logging with optional colored or JSON output, plus an optional
rotating log file. All package loggers hang off the ``registry_env`` logger.

Author: registry_env Project
License: MIT
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from pythonjsonlogger.json import JsonFormatter
from typing import Optional


ROOT_LOGGER_NAME = "registry_env"


class ColoredFormatter(logging.Formatter):
    """
    Custom formatter for colored console output.
    """

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        """Format log record with colors."""
        original = record.levelname
        log_color = self.COLORS.get(original, self.COLORS['RESET'])
        record.levelname = f"{log_color}{original}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def setup_logging(
    log_level: str = "INFO",
    log_file_path: Optional[str] = None,
    log_rotation_size: int = 10485760,  # 10MB
    log_retention_count: int = 5,
    json_format: bool = False,
    stream=None
) -> logging.Logger:
    """
    Configure package logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file_path: Path to a rotating log file, or None for console only
        log_rotation_size: Max log file size before rotation (bytes)
        log_retention_count: Number of backup log files to keep
        json_format: Use JSON formatting for logs
        stream: Console stream (defaults to stderr so stdout stays clean for dumps)

    Returns:
        Configured logger instance
    """
    level = getattr(logging, log_level.upper())

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setLevel(level)

    if json_format:
        console_formatter = JsonFormatter(
            '%(asctime)s %(name)s %(levelname)s %(message)s'
        )
    else:
        console_formatter = ColoredFormatter(
            '[%(asctime)s] %(levelname)s - %(name)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if log_file_path:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file_path,
            maxBytes=log_rotation_size,
            backupCount=log_retention_count,
            encoding='utf-8'
        )
        file_handler.setLevel(level)

        if json_format:
            file_formatter = JsonFormatter(
                '%(asctime)s %(name)s %(levelname)s %(module)s %(funcName)s %(lineno)d %(message)s'
            )
        else:
            file_formatter = logging.Formatter(
                '[%(asctime)s] %(levelname)s - %(name)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )

        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    logger.debug(f"Logging initialized at {log_level} level")
    if log_file_path:
        logger.debug(f"File logging enabled: {log_file_path}")

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
