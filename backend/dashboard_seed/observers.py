"""Progress reporting for seeding runs.

The seeding code never logs directly: it reports to a ``SeedObserver``.
The base class ignores every event, ``LoggingSeedObserver`` forwards them
to the ``dashboard_seed.seed`` logger and tests plug in their own recorder.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .seed import SeedReport, TableResult


class SeedObserver:
    def run_started(self) -> None:
        pass

    def configuration_missing(self, variable: str) -> None:
        pass

    def database_configured(self, masked_url: str) -> None:
        pass

    def probe_attempt(self, attempt: int, attempts: int) -> None:
        pass

    def probe_failed(self, attempt: int, error: BaseException) -> None:
        pass

    def probe_retrying(self, delay_seconds: float) -> None:
        pass

    def probe_succeeded(self, attempt: int) -> None:
        pass

    def table_started(self, table: str) -> None:
        pass

    def table_detail(self, table: str, message: str) -> None:
        pass

    def table_finished(self, result: "TableResult") -> None:
        pass

    def run_succeeded(self, report: "SeedReport") -> None:
        pass

    def run_failed(self, error: BaseException) -> None:
        pass


class LoggingSeedObserver(SeedObserver):
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("dashboard_seed.seed")

    def run_started(self) -> None:
        self.logger.info("Starting database seeding...")

    def configuration_missing(self, variable: str) -> None:
        self.logger.error("%s environment variable is not set", variable)

    def database_configured(self, masked_url: str) -> None:
        self.logger.info("Seeding target: %s", masked_url)

    def probe_attempt(self, attempt: int, attempts: int) -> None:
        self.logger.info("Connection attempt %s/%s...", attempt, attempts)

    def probe_failed(self, attempt: int, error: BaseException) -> None:
        self.logger.warning("Connection attempt %s failed: %s", attempt, error)

    def probe_retrying(self, delay_seconds: float) -> None:
        self.logger.info("Retrying in %s seconds...", delay_seconds)

    def probe_succeeded(self, attempt: int) -> None:
        self.logger.info("Database connection successful (attempt %s)", attempt)

    def table_started(self, table: str) -> None:
        self.logger.info("Creating %s...", table)

    def table_detail(self, table: str, message: str) -> None:
        self.logger.debug("  - [%s] %s", table, message)

    def table_finished(self, result: "TableResult") -> None:
        self.logger.info(
            "  - %s: inserted %s of %s rows",
            result.table,
            result.inserted,
            result.attempted,
        )

    def run_succeeded(self, report: "SeedReport") -> None:
        self.logger.info("Database seeded successfully (%s new rows)", report.total_inserted)

    def run_failed(self, error: BaseException) -> None:
        self.logger.error("Error seeding database: %s", error, exc_info=error)
