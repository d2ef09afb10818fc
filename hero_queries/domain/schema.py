"""
Typed table handles for the hero schema.

Each constant mirrors one table in `db/init.sql`; short aliases keep the
rendered joins readable.
"""

from __future__ import annotations

from hero_queries.query.expression import Table

RACE = Table("race")
LOCATION = Table("location")
HERO = Table("hero")
ABILITY = Table("ability")
HERO_ABILITY = Table("hero_ability", alias="ha")
TEAM = Table("team")
HERO_TEAM = Table("hero_team", alias="ht")
VILLAIN = Table("villain")
ENEMY = Table("enemy", alias="e")

__all__ = [
    "ABILITY",
    "ENEMY",
    "HERO",
    "HERO_ABILITY",
    "HERO_TEAM",
    "LOCATION",
    "RACE",
    "TEAM",
    "VILLAIN",
]
