"""
Composable query expressions built on `psycopg.sql`.

A `Query` is an immutable value: every builder method returns a new query and
nothing touches the database. Rendering happens in `Query.compose()`, which the
runner calls right before execution. A query embedded in another through
`contains()` stays unrendered until the outer query is composed, so it reaches
the server as a subquery rather than being executed on its own.

Example
-------
    from hero_queries.domain.schema import ABILITY, HERO, HERO_ABILITY

    healers = (
        Query.from_(HERO)
        .join(HERO_ABILITY, join_on(HERO.column("hero_id"), HERO_ABILITY.column("hero_id")))
        .join(ABILITY, join_on(HERO_ABILITY.column("ability_id"), ABILITY.column("ability_id")))
        .where(equals(ABILITY.column("ability_name"), "Accelerated Healing"))
        .select(HERO.column("hero_id"))
    )
    statement, params = healers.compose()
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, List, Optional, Tuple, Union

from psycopg import sql

from hero_queries.errors import QueryError


@dataclass(frozen=True)
class Table:
    name: str
    alias: Optional[str] = None

    @property
    def ref(self) -> str:
        """Name used to qualify this table's columns."""
        return self.alias or self.name

    def column(self, name: str) -> "Column":
        return Column(self, name)

    def composable(self) -> sql.Composable:
        if self.alias:
            return sql.SQL("{} AS {}").format(sql.Identifier(self.name), sql.Identifier(self.alias))
        return sql.Identifier(self.name)


@dataclass(frozen=True)
class Column:
    table: Table
    name: str

    def composable(self) -> sql.Composable:
        return sql.Identifier(self.table.ref, self.name)


@dataclass(frozen=True)
class Param:
    """A value bound as a query parameter, never interpolated."""

    value: Any


Operand = Union[Column, Param, "Query"]


def _compose_operand(operand: Operand) -> Tuple[sql.Composable, Tuple[Any, ...]]:
    if isinstance(operand, Column):
        return operand.composable(), ()
    if isinstance(operand, Param):
        return sql.Placeholder(), (operand.value,)
    if isinstance(operand, Query):
        return operand.compose()
    raise QueryError(f"Unsupported operand: {operand!r}")


@dataclass(frozen=True)
class Predicate:
    """
    A boolean SQL fragment.

    `template` holds one `{}` slot per operand, filled in order on compose.
    """

    template: str
    operands: Tuple[Operand, ...]

    def compose(self) -> Tuple[sql.Composable, Tuple[Any, ...]]:
        fragments: List[sql.Composable] = []
        params: List[Any] = []
        for operand in self.operands:
            fragment, operand_params = _compose_operand(operand)
            fragments.append(fragment)
            params.extend(operand_params)
        return sql.SQL(self.template).format(*fragments), tuple(params)


def equals(column: Column, value: Any) -> Predicate:
    """`column = value`, with the value bound as a parameter."""
    return Predicate("{} = {}", (column, Param(value)))


def join_on(left: Column, right: Column) -> Predicate:
    """Equality between two non-nullable key columns."""
    return Predicate("{} = {}", (left, right))


def nullable_join_on(left: Column, right: Column) -> Predicate:
    """
    Equality where either side may be NULL.

    Uses SQL three-valued comparison: NULL matches neither NULL nor a value,
    so rows with a NULL key drop out of an inner join. This deliberately
    differs from Python, where `None == None` holds, and must not be
    rendered as `IS NOT DISTINCT FROM`.
    """
    return Predicate("{} = {}", (left, right))


def contains(subquery: "Query", column: Column) -> Predicate:
    """
    `column IN (subquery)`.

    The subquery is kept as a query value and rendered inline when the outer
    query is composed; it is never executed separately.
    """
    if len(subquery.projection) != 1:
        raise QueryError(
            f"Membership subquery must select exactly one column, got {len(subquery.projection)}"
        )
    return Predicate("{} IN ({})", (column, subquery))


@dataclass(frozen=True)
class Sort:
    column: Column
    descending: bool = False
    collate: Optional[str] = None

    def composable(self) -> sql.Composable:
        clause = self.column.composable()
        if self.collate:
            clause = sql.SQL("{} COLLATE {}").format(clause, sql.Identifier(self.collate))
        if self.descending:
            clause = sql.SQL("{} DESC").format(clause)
        return clause


def ordinal(column: Column, descending: bool = False) -> Sort:
    """Byte-wise ordering, independent of the database's default collation."""
    return Sort(column, descending=descending, collate="C")


@dataclass(frozen=True)
class Join:
    table: Table
    on: Predicate

    def compose(self) -> Tuple[sql.Composable, Tuple[Any, ...]]:
        condition, params = self.on.compose()
        return sql.SQL("INNER JOIN {} ON {}").format(self.table.composable(), condition), params


@dataclass(frozen=True)
class Query:
    source: Optional[Table] = None
    joins: Tuple[Join, ...] = ()
    predicates: Tuple[Predicate, ...] = ()
    projection: Tuple[Column, ...] = ()
    ordering: Tuple[Sort, ...] = ()

    @classmethod
    def from_(cls, table: Table) -> "Query":
        return cls(source=table)

    def join(self, table: Table, on: Predicate) -> "Query":
        return replace(self, joins=self.joins + (Join(table, on),))

    def where(self, predicate: Predicate) -> "Query":
        """Add a filter; multiple filters are combined with AND."""
        return replace(self, predicates=self.predicates + (predicate,))

    def select(self, *columns: Column) -> "Query":
        return replace(self, projection=tuple(columns))

    def order_by(self, *sorts: Union[Sort, Column]) -> "Query":
        normalized = tuple(s if isinstance(s, Sort) else Sort(s) for s in sorts)
        return replace(self, ordering=self.ordering + normalized)

    def compose(self) -> Tuple[sql.Composed, Tuple[Any, ...]]:
        """
        Render the query.

        Returns
        -------
        tuple
            The composed statement and its positional parameters, in the order
            their placeholders appear in the text.

        Raises
        ------
        QueryError
            If the query has no source table or no projection.
        """
        if self.source is None:
            raise QueryError("Query has no source table")
        if not self.projection:
            raise QueryError("Query has no projection; call select() first")

        params: List[Any] = []
        parts: List[sql.Composable] = [
            sql.SQL("SELECT {} FROM {}").format(
                sql.SQL(", ").join(column.composable() for column in self.projection),
                self.source.composable(),
            )
        ]

        for join in self.joins:
            clause, join_params = join.compose()
            parts.append(clause)
            params.extend(join_params)

        if self.predicates:
            conditions: List[sql.Composable] = []
            for predicate in self.predicates:
                condition, predicate_params = predicate.compose()
                conditions.append(condition)
                params.extend(predicate_params)
            parts.append(sql.SQL("WHERE {}").format(sql.SQL(" AND ").join(conditions)))

        if self.ordering:
            parts.append(
                sql.SQL("ORDER BY {}").format(sql.SQL(", ").join(s.composable() for s in self.ordering))
            )

        return sql.SQL(" ").join(parts), tuple(params)


__all__ = [
    "Column",
    "Join",
    "Param",
    "Predicate",
    "Query",
    "Sort",
    "Table",
    "contains",
    "equals",
    "join_on",
    "nullable_join_on",
    "ordinal",
]
