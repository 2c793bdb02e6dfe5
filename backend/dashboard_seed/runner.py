from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from sqlalchemy.engine import Engine

from .config import ProbeSettings, Settings
from .db import create_seed_engine, mask_database_url, ping_database
from .errors import ConfigurationMissing, ConnectionFailure
from .observers import LoggingSeedObserver, SeedObserver
from .seed import SampleData, SeedReport, seed_all


EngineFactory = Callable[[Settings], Engine]
Probe = Callable[[Engine], None]


class OutcomeKind(str, Enum):
    success = "success"
    configuration_missing = "configuration_missing"
    connection_failed = "connection_failed"
    seeding_failed = "seeding_failed"


@dataclass
class SeedOutcome:
    kind: OutcomeKind
    message: Optional[str] = None
    report: Optional[SeedReport] = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.success

    @property
    def status_code(self) -> int:
        return 200 if self.ok else 500


async def wait_for_database(
    engine: Engine,
    probe: Probe,
    probe_settings: ProbeSettings,
    observer: SeedObserver,
) -> None:
    """Run ``probe`` until it succeeds, giving up after the configured attempts.

    Each attempt runs in a worker thread and is abandoned once
    ``timeout_seconds`` elapse. Raises ``ConnectionFailure`` with the last
    error message when every attempt fails.
    """
    attempts = max(probe_settings.attempts, 1)
    last_error: Optional[BaseException] = None
    for attempt in range(1, attempts + 1):
        observer.probe_attempt(attempt, attempts)
        try:
            await asyncio.wait_for(
                asyncio.to_thread(probe, engine),
                timeout=probe_settings.timeout_seconds,
            )
        except asyncio.TimeoutError:
            timeout_ms = int(probe_settings.timeout_seconds * 1000)
            last_error = TimeoutError(f"Operation timed out after {timeout_ms}ms")
        except Exception as exc:
            last_error = exc
        else:
            observer.probe_succeeded(attempt)
            return

        observer.probe_failed(attempt, last_error)
        if attempt < attempts:
            observer.probe_retrying(probe_settings.retry_delay_seconds)
            await asyncio.sleep(probe_settings.retry_delay_seconds)

    message = str(last_error) or "Unknown connection error"
    raise ConnectionFailure(message, attempts=attempts) from last_error


async def run_seed(
    settings: Settings,
    engine_factory: EngineFactory = create_seed_engine,
    probe: Probe = ping_database,
    observer: Optional[SeedObserver] = None,
    data: Optional[SampleData] = None,
) -> SeedOutcome:
    """Check configuration, probe the database and seed it.

    Never raises for the expected failure modes; each one becomes a
    ``SeedOutcome`` the caller can render. The engine is disposed on every
    path once it has been created.
    """
    observer = observer or LoggingSeedObserver()
    observer.run_started()

    if not settings.is_configured:
        error = ConfigurationMissing()
        observer.configuration_missing(error.variable)
        return SeedOutcome(OutcomeKind.configuration_missing, message=str(error))

    try:
        observer.database_configured(mask_database_url(settings.postgres_url))
        engine = engine_factory(settings)
    except Exception as exc:
        observer.run_failed(exc)
        return SeedOutcome(OutcomeKind.connection_failed, message=str(exc) or "Unknown connection error")

    try:
        try:
            await wait_for_database(engine, probe, settings.probe, observer)
        except ConnectionFailure as exc:
            observer.run_failed(exc)
            return SeedOutcome(OutcomeKind.connection_failed, message=str(exc))

        try:
            report = await asyncio.to_thread(seed_all, engine, data, observer)
        except Exception as exc:
            observer.run_failed(exc)
            return SeedOutcome(OutcomeKind.seeding_failed, message=str(exc) or "Unknown error")

        observer.run_succeeded(report)
        return SeedOutcome(OutcomeKind.success, report=report)
    finally:
        engine.dispose()
