"""Common helpers shared by all automation tools."""

from .logging_setup import get_logger, init_logger, reset_logger

__all__ = [
    "get_logger",
    "init_logger",
    "reset_logger",
]
