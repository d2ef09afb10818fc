import psycopg
import pytest

from hero_queries import config
from hero_queries.errors import DatabaseConnectionError
from hero_queries.infrastructure import db_factory
from scripts import seed_fixtures
from tests.fakes import RecordingConnection

ENV_VARS = [
    "DB_HOST",
    "DB_PORT",
    "DB_USER",
    "DB_PASSWORD",
    "DB_NAME",
    "DB_CONNECT_TIMEOUT",
    "SQL_TRACE",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_settings_defaults(clean_env):
    settings = config.Settings(_env_file=None)
    assert settings.db_host == "localhost"
    assert settings.db_port == 5432
    assert settings.db_user == "postgres"
    assert settings.db_name == "orm_test"
    assert settings.log_level == "INFO"
    assert settings.sql_trace is False
    assert settings.db_connect_timeout is None


def test_settings_read_environment(clean_env, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DB_PORT", "6543")
    monkeypatch.setenv("SQL_TRACE", "true")

    settings = config.Settings(_env_file=None)

    assert settings.db_port == 6543
    assert settings.sql_trace is True


def test_build_dsn_from_settings():
    settings = config.Settings(
        _env_file=None,
        db_host="db",
        db_port=5433,
        db_user="reader",
        db_password="secret",
        db_name="heroes",
    )
    assert db_factory.build_dsn(settings) == "postgresql://reader:secret@db:5433/heroes"


def test_connection_failure_raises_connection_error(monkeypatch: pytest.MonkeyPatch):
    cause = psycopg.OperationalError("could not connect to server")

    def _refuse(*args, **kwargs):
        raise cause

    monkeypatch.setattr(db_factory.psycopg, "connect", _refuse)

    with pytest.raises(DatabaseConnectionError) as excinfo:
        db_factory.get_sync_connection("postgresql://nobody@127.0.0.1:1/none")
    assert excinfo.value.__cause__ is cause


def test_seed_script_ships_schema_and_fixtures():
    assert seed_fixtures.SCHEMA_PATH.exists()
    assert seed_fixtures.FIXTURES_PATH.exists()
    assert seed_fixtures._sql_files(schema_only=True) == [seed_fixtures.SCHEMA_PATH]
    assert seed_fixtures._sql_files(schema_only=False) == [
        seed_fixtures.SCHEMA_PATH,
        seed_fixtures.FIXTURES_PATH,
    ]


def test_fixture_data_keeps_a_hero_without_location():
    fixtures = seed_fixtures.FIXTURES_PATH.read_text(encoding="utf-8")
    assert "(5, 'Daredevil', 2, NULL)" in fixtures


def _capture_connect(monkeypatch: pytest.MonkeyPatch, settings: config.Settings) -> list[dict]:
    calls: list[dict] = []

    def _connect(dsn, **kwargs):
        calls.append(kwargs)
        return RecordingConnection()

    monkeypatch.setattr(db_factory, "get_settings", lambda: settings)
    monkeypatch.setattr(db_factory.psycopg, "connect", _connect)
    return calls


def test_no_connect_timeout_unless_configured(clean_env, monkeypatch: pytest.MonkeyPatch):
    calls = _capture_connect(monkeypatch, config.Settings(_env_file=None))

    conn = db_factory.get_sync_connection("postgresql://reader@db/heroes")

    assert calls == [{}]
    assert conn.read_only is True


def test_configured_connect_timeout_is_passed_through(clean_env, monkeypatch: pytest.MonkeyPatch):
    calls = _capture_connect(monkeypatch, config.Settings(_env_file=None, db_connect_timeout=3))

    db_factory.get_sync_connection("postgresql://reader@db/heroes")

    assert calls == [{"connect_timeout": 3}]
