"""
================================================================================
Logging Setup for Automation Tools
================================================================================

Centralized Loguru configuration for the test runner and the test suites.

Features:
    - Single stderr sink with a consistent format
    - Optional rotating file sink
    - Idempotent initialization (safe to call from several entry points)

Values normally come from the `logging` section of config/config.yaml; the
caller reads them and passes them in.

Author: Automation Team
License: MIT
================================================================================
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger


DEFAULT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"

_logger_initialized: bool = False


def init_logger(
    level: str = "INFO",
    format_str: Optional[str] = None,
    log_file: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format_str: Custom log format string
        log_file: Optional file path for an additional rotating sink
        rotation: Rotation policy for the file sink
        retention: Retention policy for the file sink
    """
    global _logger_initialized

    if _logger_initialized:
        return

    log_format = format_str or DEFAULT_FORMAT

    # Remove default logger and add configured one
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=level.upper(),
            format=log_format.replace("{level: <8}", "{level}"),  # Remove padding for file
            rotation=rotation,
            retention=retention,
            compression="zip",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {level}")


def get_logger():
    """
    Returns the configured Loguru logger instance.

    Ensures the logger is initialized before returning.
    """
    if not _logger_initialized:
        init_logger()
    return logger


def reset_logger() -> None:
    """Allow the next init_logger() call to reconfigure sinks."""
    global _logger_initialized
    _logger_initialized = False
