"""
Exception taxonomy for Hero Queries.

Database failures are surfaced as DataAccessError subclasses chained to the
originating psycopg exception. Comparator mismatches are AssertionErrors so
pytest reports them as ordinary test failures.
"""

from __future__ import annotations


class DataAccessError(Exception):
    """Base class for failures raised while talking to the database."""


class DatabaseConnectionError(DataAccessError):
    """The database could not be reached."""


class QueryError(DataAccessError):
    """A query was malformed or rejected by the database."""


class AssertionMismatch(AssertionError):
    """Formatted query output differs from the expected literal."""


__all__ = [
    "AssertionMismatch",
    "DataAccessError",
    "DatabaseConnectionError",
    "QueryError",
]
