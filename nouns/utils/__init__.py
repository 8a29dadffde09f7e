"""
Utilities - logging helpers shared across the package.
"""

from nouns.utils.logging import get_logger, log_error, log_operation, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "log_operation",
    "log_error",
]
