"""Seed the dashboard database from the command line instead of ``GET /seed``."""

import asyncio
import logging
import sys

from dashboard_seed.config import settings
from dashboard_seed.runner import run_seed


def main() -> int:
	"""Run one seeding pass with the environment configuration; return the exit code."""
	logging.basicConfig(level=settings.log_level, format="%(asctime)s [%(levelname)s] %(message)s")
	outcome = asyncio.run(run_seed(settings))
	if not outcome.ok:
		print(f"Seeding failed ({outcome.kind.value}): {outcome.message}", file=sys.stderr)
		return 1
	for result in outcome.report.results:
		print(f"{result.table:<10} inserted {result.inserted} of {result.attempted}")
	return 0


if __name__ == "__main__":
	sys.exit(main())
