"""
Infrastructure package for Hero Queries.

Centralizes database connectivity concerns (DSN composition, connection
factory). Keep this layer focused on I/O, decoupled from query composition.
"""

from hero_queries.infrastructure.db_factory import (
    build_dsn,
    get_sync_connection,
    wait_for_database,
)

__all__ = [
    "build_dsn",
    "get_sync_connection",
    "wait_for_database",
]
