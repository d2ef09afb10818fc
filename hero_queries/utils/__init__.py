"""
Utilities package for Hero Queries.

Exports shared logging helpers. Keep this package lightweight and free of
domain-specific logic.
"""

from hero_queries.utils.logging import SQL_LOGGER_NAME, configure_logging, get_logger

__all__ = [
    "SQL_LOGGER_NAME",
    "configure_logging",
    "get_logger",
]
