from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Iterator

import typer

from hero_queries.comparator import join
from hero_queries.config import get_settings
from hero_queries.errors import DataAccessError
from hero_queries.infrastructure.db_factory import get_sync_connection
from hero_queries.queries import HeroQueries
from hero_queries.query.runner import QueryRunner
from hero_queries.utils.logging import configure_logging

app = typer.Typer(help="Hero Queries CLI.")


@contextmanager
def _hero_queries() -> Iterator[HeroQueries]:
    settings = get_settings()
    configure_logging(
        level=settings.log_level, json_logs=settings.log_json, sql_trace=settings.sql_trace
    )
    conn = get_sync_connection()
    try:
        yield HeroQueries(QueryRunner(conn))
    finally:
        conn.close()


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"env={settings.app_env} log_level={settings.log_level} sql_trace={settings.sql_trace}"
    )


@app.command()
def races() -> None:
    """
    List all races as `id,name`.
    """
    with _hero_queries() as queries:
        typer.echo(join((race.format() for race in queries.races()), ";"))


@app.command()
def heroes() -> None:
    """
    List all heroes with their raw race and location ids.
    """
    with _hero_queries() as queries:
        for hero in queries.heroes():
            typer.echo(f"{hero.hero_id},{hero.hero_name},{hero.race_id},{hero.location_id}")


@app.command("race-heroes")
def race_heroes(
    race: str = typer.Option(..., "--race", "-r", help="Race name to filter on."),
) -> None:
    """
    List heroes of a race with their location.
    """
    with _hero_queries() as queries:
        for hero_name, location_name in queries.heroes_of_race(race):
            typer.echo(f"{hero_name},{location_name}")


@app.command("ability-heroes")
def ability_heroes(
    ability: str = typer.Option(..., "--ability", "-a", help="Ability name to filter on."),
    expand: bool = typer.Option(
        False,
        "--expand",
        help="Also list every other ability of the matching heroes.",
    ),
) -> None:
    """
    List heroes possessing an ability.
    """
    with _hero_queries() as queries:
        if expand:
            for hero_name, ability_name in queries.abilities_of_heroes_with(ability):
                typer.echo(f"{hero_name}, {ability_name}")
        else:
            for hero_name in queries.heroes_with_ability(ability):
                typer.echo(hero_name)


@app.command("team-villains")
def team_villains(
    team: str = typer.Option(..., "--team", "-t", help="Team name to filter on."),
) -> None:
    """
    List villains who have fought members of a team, ordered by hero name.
    """
    with _hero_queries() as queries:
        for villain_name in queries.villains_fought_by_team(team):
            typer.echo(villain_name)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
    except DataAccessError as exc:
        typer.echo(f"Database error: {exc}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
