from html import escape
from string import Template
from typing import Tuple

from .runner import OutcomeKind, SeedOutcome


_PAGE = Template(
    """<!DOCTYPE html>
<html>
  <head>
    <title>$title</title>
    <style>
      body { font-family: Arial, sans-serif; padding: 20px; }
      .success { color: green; }
      .error { color: red; }
      table { border-collapse: collapse; margin-top: 12px; }
      td, th { border: 1px solid #ddd; padding: 4px 10px; text-align: left; }
    </style>
  </head>
  <body>
    <h1 class="$css_class">$heading</h1>
    $body
    <p><a href="$dashboard_path">Go to Dashboard</a></p>
  </body>
</html>
"""
)

_TITLES = {
    OutcomeKind.success: ("Database Seeded Successfully", "✅ Database Seeded Successfully!"),
    OutcomeKind.configuration_missing: ("Environment Variable Error", "❌ Environment Variable Error"),
    OutcomeKind.connection_failed: ("Database Connection Error", "❌ Database Connection Failed"),
    OutcomeKind.seeding_failed: ("Database Seeding Error", "❌ Database Seeding Failed"),
}


def _success_body(outcome: SeedOutcome) -> str:
    parts = ["<p>All tables and data have been created successfully.</p>"]
    if outcome.report is not None:
        rows = "".join(
            f"<tr><td>{escape(result.table)}</td><td>{result.inserted}</td><td>{result.attempted}</td></tr>"
            for result in outcome.report.results
        )
        parts.append(
            "<table><tr><th>Table</th><th>Inserted</th><th>Records</th></tr>" + rows + "</table>"
        )
    return "\n    ".join(parts)


def _error_body(outcome: SeedOutcome) -> str:
    if outcome.kind is OutcomeKind.configuration_missing:
        return f"<p>{escape(outcome.message or 'POSTGRES_URL environment variable is not set')}</p>"
    return f"<p>Error: {escape(outcome.message or 'Unknown error')}</p>"


def render_outcome(outcome: SeedOutcome, dashboard_path: str = "/dashboard") -> Tuple[int, str]:
    """Return the HTTP status and HTML document describing ``outcome``."""
    title, heading = _TITLES[outcome.kind]
    body = _success_body(outcome) if outcome.ok else _error_body(outcome)
    html = _PAGE.substitute(
        title=title,
        css_class="success" if outcome.ok else "error",
        heading=heading,
        body=body,
        dashboard_path=escape(dashboard_path, quote=True),
    )
    return outcome.status_code, html
