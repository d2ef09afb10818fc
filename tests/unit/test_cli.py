from __future__ import annotations

import pytest
from typer.testing import CliRunner

from hero_queries import main
from hero_queries.domain.models import Hero, Race
from tests.fakes import RecordingConnection

runner = CliRunner()


@pytest.fixture
def fake_connection(monkeypatch: pytest.MonkeyPatch) -> RecordingConnection:
    conn = RecordingConnection()
    monkeypatch.setattr(main, "get_sync_connection", lambda: conn)
    monkeypatch.setattr(main, "configure_logging", lambda **kwargs: None)
    return conn


def test_info_shows_database_target():
    result = runner.invoke(main.app, ["info"])

    assert result.exit_code == 0
    assert "DB=" in result.stdout
    assert "sql_trace=" in result.stdout


def test_races_prints_joined_rows(fake_connection: RecordingConnection):
    fake_connection.rows = [Race(race_id=1, race_name="Mutant"), Race(race_id=2, race_name="Human")]

    result = runner.invoke(main.app, ["races"])

    assert result.exit_code == 0
    assert result.stdout.strip() == "1,Mutant;2,Human"
    assert fake_connection.closed


def test_team_villains_prints_one_per_line(fake_connection: RecordingConnection):
    fake_connection.rows = [("Abomination",), ("Venom",)]

    result = runner.invoke(main.app, ["team-villains", "--team", "Avengers"])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["Abomination", "Venom"]
    assert fake_connection.executed[0][1] == ("Avengers",)


def test_expanded_ability_heroes(fake_connection: RecordingConnection):
    fake_connection.rows = [("Wolverine", "Accelerated Healing"), ("Wolverine", "Retractable Claws")]

    result = runner.invoke(main.app, ["ability-heroes", "--ability", "Accelerated Healing", "--expand"])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "Wolverine, Accelerated Healing",
        "Wolverine, Retractable Claws",
    ]


def test_heroes_prints_raw_ids(fake_connection: RecordingConnection):
    fake_connection.rows = [
        Hero(hero_id=1, hero_name="Wolverine", race_id=1, location_id=3),
        Hero(hero_id=6, hero_name="Silver Surfer"),
    ]

    result = runner.invoke(main.app, ["heroes"])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["1,Wolverine,1,3", "6,Silver Surfer,None,None"]


def test_race_heroes_prints_hero_and_location(fake_connection: RecordingConnection):
    fake_connection.rows = [("Hulk", "Canadian Rockies"), ("Spider Man", "New York, New York")]

    result = runner.invoke(main.app, ["race-heroes", "--race", "Human"])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["Hulk,Canadian Rockies", "Spider Man,New York, New York"]
    assert fake_connection.executed[0][1] == ("Human",)


def test_ability_heroes_prints_names_only(fake_connection: RecordingConnection):
    fake_connection.rows = [("Wolverine",), ("Spider Man",)]

    result = runner.invoke(main.app, ["ability-heroes", "-a", "Accelerated Healing"])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["Wolverine", "Spider Man"]
    assert fake_connection.executed[0][1] == ("Accelerated Healing",)
