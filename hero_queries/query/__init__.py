"""
Query package for Hero Queries.

Re-exports the expression builder and the runner so callers can import from
`hero_queries.query` directly.
"""

from hero_queries.query.expression import (
    Column,
    Predicate,
    Query,
    Sort,
    Table,
    contains,
    equals,
    join_on,
    nullable_join_on,
    ordinal,
)
from hero_queries.query.runner import QueryRunner

__all__ = [
    "Column",
    "Predicate",
    "Query",
    "QueryRunner",
    "Sort",
    "Table",
    "contains",
    "equals",
    "join_on",
    "nullable_join_on",
    "ordinal",
]
