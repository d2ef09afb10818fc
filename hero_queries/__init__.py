"""
Hero Queries - join/filter/sort/select examples over a PostgreSQL hero schema.

This package provides:

- Composable, lazily rendered query expressions on top of psycopg.sql
- A thin runner that executes them over one read-only connection
- Five named query shapes over races, heroes, abilities, teams and villains
- String-join and byte-exact comparison helpers for asserting on results
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from hero_queries.comparator import assert_same_string, join
from hero_queries.config import Settings, get_settings
from hero_queries.errors import (
    AssertionMismatch,
    DatabaseConnectionError,
    DataAccessError,
    QueryError,
)
from hero_queries.queries import HeroQueries
from hero_queries.query.expression import Query
from hero_queries.query.runner import QueryRunner
from hero_queries.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Queries
    "HeroQueries",
    "Query",
    "QueryRunner",
    # Comparison
    "assert_same_string",
    "join",
    # Errors
    "AssertionMismatch",
    "DataAccessError",
    "DatabaseConnectionError",
    "QueryError",
    # Logging
    "configure_logging",
    "get_logger",
]
