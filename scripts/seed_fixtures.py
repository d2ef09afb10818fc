"""
Schema and fixture loading script for Hero Queries.

Waits for PostgreSQL to accept connections, then applies `db/init.sql` and
`db/fixtures.sql` in a single transaction. Re-running restores the reference
dataset exactly.
"""

from __future__ import annotations

import sys
import time
from pathlib import Path

import typer

from hero_queries.infrastructure.db_factory import build_dsn, get_sync_connection, wait_for_database
from hero_queries.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Create the hero schema and load the reference fixture data.")
log = get_logger(__name__)

DB_DIR = Path(__file__).resolve().parent.parent / "db"
SCHEMA_PATH = DB_DIR / "init.sql"
FIXTURES_PATH = DB_DIR / "fixtures.sql"


def _build_dsn(dsn_override: str | None) -> str:
    if dsn_override:
        return dsn_override
    return build_dsn()


def _sql_files(schema_only: bool) -> list[Path]:
    return [SCHEMA_PATH] if schema_only else [SCHEMA_PATH, FIXTURES_PATH]


def _apply_sql_files(dsn: str, paths: list[Path]) -> int:
    """Execute each file in order and commit once; returns the file count."""
    conn = get_sync_connection(dsn, read_only=False)
    try:
        with conn.cursor() as cur:
            for path in paths:
                log.info("Applying SQL file", extra={"path": str(path)})
                cur.execute(path.read_text(encoding="utf-8"))
        conn.commit()
    finally:
        conn.close()
    return len(paths)


@app.command()
def main(
    dsn: str | None = typer.Option(
        None,
        "--dsn",
        help="Optional DSN override for Postgres.",
    ),
    schema_only: bool = typer.Option(
        False,
        "--schema-only",
        help="Create tables without (re)loading fixture rows.",
    ),
    no_wait: bool = typer.Option(
        False,
        "--no-wait",
        help="Fail immediately instead of retrying while the server starts.",
    ),
) -> None:
    """
    Create the schema and load the fixture data.
    """
    configure_logging(level="INFO")
    conn_dsn = _build_dsn(dsn)
    start = time.perf_counter()

    if not no_wait:
        typer.echo("Waiting for Postgres to accept connections...")
        wait_for_database(conn_dsn)

    applied = _apply_sql_files(conn_dsn, _sql_files(schema_only))
    typer.echo(f"Applied {applied} SQL file(s) in {time.perf_counter() - start:.2f}s.")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
