"""
Named query shapes over the hero schema.

Each public method builds one query expression and executes it through a
`QueryRunner`. The `*_query` builders return unexecuted `Query` values; the
two-stage operations embed them as subqueries so the database evaluates both
stages in a single statement.

Orderings the result literals depend on are pinned explicitly with ORDER BY,
so output does not hinge on a particular query plan.
"""

from __future__ import annotations

from typing import List, Tuple

from psycopg.rows import class_row

from hero_queries.domain.models import Hero, Race
from hero_queries.domain.schema import (
    ABILITY,
    ENEMY,
    HERO,
    HERO_ABILITY,
    HERO_TEAM,
    LOCATION,
    RACE,
    TEAM,
    VILLAIN,
)
from hero_queries.query.expression import (
    Query,
    contains,
    equals,
    join_on,
    nullable_join_on,
    ordinal,
)
from hero_queries.query.runner import QueryRunner


def heroes_with_ability_query(ability_name: str) -> Query:
    """Ids of heroes possessing `ability_name`. Not executed."""
    return (
        Query.from_(HERO)
        .join(HERO_ABILITY, join_on(HERO.column("hero_id"), HERO_ABILITY.column("hero_id")))
        .join(ABILITY, join_on(HERO_ABILITY.column("ability_id"), ABILITY.column("ability_id")))
        .where(equals(ABILITY.column("ability_name"), ability_name))
        .select(HERO.column("hero_id"))
    )


def team_members_query(team_name: str) -> Query:
    """Ids of heroes belonging to the team named `team_name`. Not executed."""
    return (
        Query.from_(HERO)
        .join(HERO_TEAM, join_on(HERO.column("hero_id"), HERO_TEAM.column("hero_id")))
        .join(TEAM, join_on(HERO_TEAM.column("team_id"), TEAM.column("team_id")))
        .where(equals(TEAM.column("team_name"), team_name))
        .select(HERO.column("hero_id"))
    )


class HeroQueries:
    """
    Read-only queries against the hero fixture database.
    """

    def __init__(self, runner: QueryRunner) -> None:
        self._runner = runner

    def races(self) -> List[Race]:
        """All races in insertion order."""
        query = (
            Query.from_(RACE)
            .select(RACE.column("race_id"), RACE.column("race_name"))
            .order_by(RACE.column("race_id"))
        )
        return self._runner.execute(query, row_factory=class_row(Race))

    def heroes(self) -> List[Hero]:
        """All heroes in insertion order, including those with NULL keys."""
        query = (
            Query.from_(HERO)
            .select(
                HERO.column("hero_id"),
                HERO.column("hero_name"),
                HERO.column("race_id"),
                HERO.column("location_id"),
            )
            .order_by(HERO.column("hero_id"))
        )
        return self._runner.execute(query, row_factory=class_row(Hero))

    def heroes_of_race(self, race_name: str) -> List[Tuple[str, str]]:
        """
        (hero_name, location_name) for every hero of `race_name`.

        Heroes whose location or race is NULL are excluded by the inner joins.
        """
        query = (
            Query.from_(HERO)
            .join(LOCATION, nullable_join_on(HERO.column("location_id"), LOCATION.column("location_id")))
            .join(RACE, nullable_join_on(HERO.column("race_id"), RACE.column("race_id")))
            .where(equals(RACE.column("race_name"), race_name))
            .select(HERO.column("hero_name"), LOCATION.column("location_name"))
            .order_by(HERO.column("hero_id"))
        )
        return self._runner.execute(query)

    def heroes_with_ability(self, ability_name: str) -> List[str]:
        query = (
            Query.from_(HERO)
            .join(HERO_ABILITY, join_on(HERO.column("hero_id"), HERO_ABILITY.column("hero_id")))
            .join(ABILITY, join_on(HERO_ABILITY.column("ability_id"), ABILITY.column("ability_id")))
            .where(equals(ABILITY.column("ability_name"), ability_name))
            .select(HERO.column("hero_name"))
            .order_by(HERO.column("hero_id"))
        )
        return [hero_name for (hero_name,) in self._runner.execute(query)]

    def abilities_of_heroes_with(self, ability_name: str) -> List[Tuple[str, str]]:
        """
        Every (hero_name, ability_name) pair for heroes possessing `ability_name`.

        Sorted by hero name, then ability name, both byte-wise.
        """
        holders = heroes_with_ability_query(ability_name)
        query = (
            Query.from_(HERO)
            .join(HERO_ABILITY, join_on(HERO.column("hero_id"), HERO_ABILITY.column("hero_id")))
            .join(ABILITY, join_on(HERO_ABILITY.column("ability_id"), ABILITY.column("ability_id")))
            .where(contains(holders, HERO.column("hero_id")))
            .select(HERO.column("hero_name"), ABILITY.column("ability_name"))
            .order_by(ordinal(HERO.column("hero_name")), ordinal(ABILITY.column("ability_name")))
        )
        return self._runner.execute(query)

    def villains_fought_by_team(self, team_name: str) -> List[str]:
        """
        Names of villains who are enemies of any member of `team_name`.

        Sorted by the *hero's* name, not the villain's; villains of the same
        hero keep their villain_id order.
        """
        members = team_members_query(team_name)
        query = (
            Query.from_(HERO)
            .join(ENEMY, join_on(HERO.column("hero_id"), ENEMY.column("hero_id")))
            .join(VILLAIN, join_on(ENEMY.column("villain_id"), VILLAIN.column("villain_id")))
            .where(contains(members, HERO.column("hero_id")))
            .select(VILLAIN.column("villain_name"))
            .order_by(ordinal(HERO.column("hero_name")), VILLAIN.column("villain_id"))
        )
        return [villain_name for (villain_name,) in self._runner.execute(query)]


__all__ = ["HeroQueries", "heroes_with_ability_query", "team_members_query"]
