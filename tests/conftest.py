"""
Pytest configuration for Hero Queries.

Provides fixtures for:
- Settings override for integration tests
- Database connection management
- Schema creation and fixture seeding
- Recording connection doubles for unit tests
"""

from __future__ import annotations

import os
from typing import Generator

import psycopg
import pytest

from hero_queries.config import Settings
from hero_queries.queries import HeroQueries
from hero_queries.query.runner import QueryRunner
from hero_queries.utils.logging import configure_logging
from tests.fakes import RecordingConnection


@pytest.fixture
def recording_connection() -> RecordingConnection:
    return RecordingConnection()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "orm_test"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.OperationalError:
        return False


@pytest.fixture(scope="session")
def hero_fixtures_loaded(test_dsn: str, db_connection_available: bool) -> bool:
    """
    Create the schema and (re)load the reference dataset once per session.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    from scripts.seed_fixtures import FIXTURES_PATH, SCHEMA_PATH, _apply_sql_files

    _apply_sql_files(test_dsn, [SCHEMA_PATH, FIXTURES_PATH])
    return True


@pytest.fixture(scope="session")
def db_connection(
    test_dsn: str, hero_fixtures_loaded: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped, read-only connection for integration tests.
    """
    conn = psycopg.connect(test_dsn)
    conn.read_only = True
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="session")
def hero_queries(db_connection: psycopg.Connection, test_settings: Settings) -> HeroQueries:
    """
    Query layer over the session connection, with generated SQL traced.
    """
    configure_logging(level=test_settings.log_level, sql_trace=True)
    return HeroQueries(QueryRunner(db_connection))
