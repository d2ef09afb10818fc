"""
Database connection factory utilities for Hero Queries.

Composes the PostgreSQL DSN from settings and opens the single read-only
connection the query layer reuses. Connection failures are translated into
DatabaseConnectionError and are never retried on the query path.

The one retrying helper, `wait_for_database`, is used by the fixture seeding
script to wait for a freshly started server and relies on tenacity.
"""

from __future__ import annotations

from typing import Optional

import psycopg
from psycopg import Connection
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from hero_queries.config import Settings, get_settings
from hero_queries.errors import DatabaseConnectionError
from hero_queries.utils.logging import get_logger

log = get_logger(__name__)


def build_dsn(settings: Optional[Settings] = None) -> str:
    """Compose a DSN string from settings."""
    settings = settings or get_settings()
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


def get_sync_connection(dsn: Optional[str] = None, read_only: bool = True) -> Connection:
    """
    Open a dedicated synchronous connection.

    Parameters
    ----------
    dsn : str, optional
        Connection string; defaults to the one composed from settings.
    read_only : bool
        Whether transactions started on the connection are READ ONLY.

    Returns
    -------
    Connection
        A new psycopg connection instance.

    Raises
    ------
    DatabaseConnectionError
        If the server cannot be reached.
    """
    settings = get_settings()
    options = {}
    if settings.db_connect_timeout is not None:
        options["connect_timeout"] = settings.db_connect_timeout
    try:
        conn = psycopg.connect(dsn or build_dsn(settings), **options)
    except psycopg.OperationalError as exc:
        raise DatabaseConnectionError(str(exc)) from exc
    conn.read_only = read_only
    log.debug("Opened database connection", extra={"read_only": read_only})
    return conn


@retry(
    stop=stop_after_attempt(5),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type(DatabaseConnectionError),
    reraise=True,
)
def wait_for_database(dsn: Optional[str] = None) -> None:
    """
    Block until the server accepts connections.

    Retries up to 5 times with exponential backoff.

    Raises
    ------
    DatabaseConnectionError
        If the server is still unreachable after all attempts.
    """
    conn = get_sync_connection(dsn)
    try:
        with conn.cursor() as cur:
            cur.execute("SELECT 1;")
            cur.fetchone()
    finally:
        conn.close()


__all__ = [
    "build_dsn",
    "get_sync_connection",
    "wait_for_database",
]
