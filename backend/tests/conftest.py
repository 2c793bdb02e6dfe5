from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func, inspect, select

from dashboard_seed.config import ProbeSettings, Settings, get_settings
from dashboard_seed.models import SEED_TABLES
from dashboard_seed.observers import SeedObserver


class RecordingObserver(SeedObserver):
    """Collects every seeding event as ``(name, args)`` instead of logging it."""

    def __init__(self) -> None:
        self.events = []

    def _record(self, name, *args) -> None:
        self.events.append((name, args))

    def names(self):
        return [name for name, _ in self.events]

    def run_started(self):
        self._record("run_started")

    def configuration_missing(self, variable):
        self._record("configuration_missing", variable)

    def database_configured(self, masked_url):
        self._record("database_configured", masked_url)

    def probe_attempt(self, attempt, attempts):
        self._record("probe_attempt", attempt, attempts)

    def probe_failed(self, attempt, error):
        self._record("probe_failed", attempt, error)

    def probe_retrying(self, delay_seconds):
        self._record("probe_retrying", delay_seconds)

    def probe_succeeded(self, attempt):
        self._record("probe_succeeded", attempt)

    def table_started(self, table):
        self._record("table_started", table)

    def table_detail(self, table, message):
        self._record("table_detail", table, message)

    def table_finished(self, result):
        self._record("table_finished", result)

    def run_succeeded(self, report):
        self._record("run_succeeded", report)

    def run_failed(self, error):
        self._record("run_failed", error)


@pytest.fixture()
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'seed.db'}"


@pytest.fixture()
def test_settings(database_url: str) -> Settings:
    return Settings(
        postgres_url=database_url,
        probe=ProbeSettings(attempts=3, timeout_seconds=2.0, retry_delay_seconds=0),
    )


@pytest.fixture()
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture()
def row_counts(database_url: str) -> Callable[[], Dict[str, int]]:
    """Return a callable giving the current row count of every seed table.

    Tables that do not exist (e.g. their creation was rolled back) count as 0.
    """

    def _counts() -> Dict[str, int]:
        engine = create_engine(database_url)
        try:
            existing = set(inspect(engine).get_table_names())
            counts: Dict[str, int] = {}
            with engine.connect() as connection:
                for model in SEED_TABLES:
                    name = model.__tablename__
                    if name not in existing:
                        counts[name] = 0
                        continue
                    counts[name] = connection.execute(select(func.count()).select_from(model.__table__)).scalar_one()
            return counts
        finally:
            engine.dispose()

    return _counts


@pytest.fixture()
def client(test_settings: Settings, observer: RecordingObserver):
    from dashboard_seed.main import app
    from dashboard_seed.routers.seed import get_observer

    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_observer] = lambda: observer
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
