"""
Execution of composed queries against an open psycopg connection.

The runner is a thin pass-through: it renders a `Query`, optionally traces the
SQL text, executes it once and returns the fetched rows. psycopg failures are
re-raised as DataAccessError subclasses; nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any, List

import psycopg
from psycopg import Connection
from psycopg.rows import RowFactory, tuple_row

from hero_queries.errors import DatabaseConnectionError, QueryError
from hero_queries.query.expression import Query
from hero_queries.utils.logging import SQL_LOGGER_NAME, get_logger

log = get_logger(__name__)
sql_log = get_logger(SQL_LOGGER_NAME)


class QueryRunner:
    """
    Execute query expressions over a single, externally owned connection.
    """

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def _rollback(self) -> None:
        """End the aborted transaction so the connection stays usable."""
        if self._conn.closed or self._conn.broken:
            return
        self._conn.rollback()

    def execute(self, query: Query, row_factory: RowFactory[Any] = tuple_row) -> List[Any]:
        """
        Run `query` and fetch every row.

        Parameters
        ----------
        query : Query
            The expression to execute. Embedded subqueries are rendered inline.
        row_factory : RowFactory
            psycopg row factory; defaults to plain tuples.

        Returns
        -------
        list
            Rows in the order the database returned them.

        Raises
        ------
        DatabaseConnectionError
            If the connection to the server is lost.
        QueryError
            If the statement is invalid or rejected by the server.
        """
        statement, params = query.compose()
        if sql_log.isEnabledFor(logging.DEBUG):
            sql_log.debug(statement.as_string(self._conn), extra={"params": list(params)})

        try:
            with self._conn.cursor(row_factory=row_factory) as cur:
                cur.execute(statement, params)
                rows = cur.fetchall()
        except psycopg.OperationalError as exc:
            self._rollback()
            raise DatabaseConnectionError(str(exc)) from exc
        except psycopg.Error as exc:
            self._rollback()
            raise QueryError(str(exc)) from exc

        log.debug("Query returned rows", extra={"rows": len(rows)})
        return rows


__all__ = ["QueryRunner"]
