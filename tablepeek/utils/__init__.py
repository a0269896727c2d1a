"""
Utilities package for tablepeek.

Exports shared helpers for logging. Keep this package lightweight and free of
domain-specific logic.
"""

from tablepeek.utils.logging import JsonFormatter, configure_logging, get_logger

__all__ = [
    "JsonFormatter",
    "configure_logging",
    "get_logger",
]
