from sqlalchemy import Table, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Connection, Engine, make_url
from sqlalchemy.exc import ArgumentError
from sqlmodel import create_engine

from .config import Settings


_CONFLICT_AWARE_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def normalize_database_url(url: str) -> str:
    """Accept the ``postgres://`` scheme handed out by hosted Postgres providers."""
    cleaned = url.strip()
    if cleaned.startswith("postgres://"):
        return "postgresql://" + cleaned[len("postgres://"):]
    return cleaned


def mask_database_url(url: str) -> str:
    try:
        return make_url(normalize_database_url(url)).render_as_string(hide_password=True)
    except (ArgumentError, ValueError):
        scheme, separator, _ = url.partition("://")
        return f"{scheme}://..." if separator else url[:20] + "..."


def create_seed_engine(settings: Settings) -> Engine:
    """Build a single-connection engine for one seeding run.

    The caller owns the engine and must ``dispose()`` it once the run ends.
    """
    url = normalize_database_url(settings.postgres_url or "")
    # SQLite en tests y ejecuciones locales (hilos)
    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=settings.debug,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        url,
        echo=settings.debug,
        pool_size=1,
        max_overflow=0,
        connect_args={
            "sslmode": settings.ssl_mode,
            "connect_timeout": settings.connect_timeout_seconds,
            "application_name": settings.application_name,
        },
    )


def ping_database(engine: Engine) -> None:
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))


def insert_ignoring_conflicts(connection: Connection, table: Table):
    """Return ``INSERT ... ON CONFLICT DO NOTHING`` for the connection's dialect."""
    dialect = connection.dialect.name
    try:
        insert = _CONFLICT_AWARE_INSERTS[dialect]
    except KeyError:
        raise NotImplementedError(f"Idempotent inserts are not supported on {dialect}")
    return insert(table).on_conflict_do_nothing()
