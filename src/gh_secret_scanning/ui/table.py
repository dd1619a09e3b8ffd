"""
Terminal table rendering.

Renders alerts as a Rich table followed by a fetched-count summary.
"""

from __future__ import annotations

from typing import Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from gh_secret_scanning.models.alert import Alert
from gh_secret_scanning.ui.reporting import alert_headers, alert_row


def build_alerts_table(alerts: Sequence[Alert], limit: int,
                       show_secret: bool = False, validity: bool = False,
                       verbose: bool = False) -> Table:
	"""Build a Rich table with at most ``limit`` alert rows."""
	table = Table(box=box.SIMPLE, header_style="bold green")
	for header in alert_headers(show_secret, validity, verbose):
		table.add_column(header, overflow="fold")
	for alert in alerts[:limit]:
		# Text cells keep secrets containing "[" from being read as markup
		cells = [
		    Text(c) for c in alert_row(alert, show_secret, validity, verbose)
		]
		if validity and alert.validity_boolean:
			table.add_row(*cells, style="red")
		else:
			table.add_row(*cells)
	return table


def fetched_summary(alerts: Sequence[Alert], limit: int) -> Text:
	"""Summary line: the number of alerts shown."""
	count = min(limit, len(alerts))
	return Text(f"Fetched {count} secret alerts.", style="blue")


def render_alerts(alerts: Sequence[Alert], limit: int,
                  console: Console | None = None, show_secret: bool = False,
                  validity: bool = False, verbose: bool = False,
                  quiet: bool = False) -> None:
	"""
	Print the alerts table and summary line.

	Parameters:
		alerts: Alerts in report order.
		limit: Maximum rows to print.
		console: Rich console; stdout when None.
		show_secret: Include the secret value column.
		validity: Include the validity columns.
		verbose: Include the extended alert columns.
		quiet: Only print the summary line.
	"""
	console = console or Console()
	if alerts and not quiet:
		console.print(
		    build_alerts_table(alerts, limit, show_secret, validity,
		                       verbose))
	console.print(fetched_summary(alerts, limit))


__all__ = ["build_alerts_table", "fetched_summary", "render_alerts"]
