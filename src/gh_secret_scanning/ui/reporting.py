"""
Report columns and CSV persistence.

The table and CSV outputs share one column definition so they never
drift apart.
"""

from __future__ import annotations

import csv
from datetime import datetime
from pathlib import Path
from typing import List, Sequence

from gh_secret_scanning.models.alert import Alert, User

BASE_HEADERS = ["Repository", "ID", "State", "Secret Type"]
SECRET_HEADERS = ["Secret"]
VALIDITY_HEADERS = ["Confirmed Valid", "Validity Check Status Code"]
VERBOSE_HEADERS = [
    "Created At",
    "Resolution",
    "Resolved At",
    "Resolved By",
    "Push Protection Bypassed",
    "Push Protection Bypassed At",
    "Push Protection Bypassed By",
    "URL",
]


def _login(user: User | None) -> str:
	return user.login if user else ""


def _flag(value: bool | None) -> str:
	return "true" if value else "false"


def alert_headers(show_secret: bool = False, validity: bool = False,
                  verbose: bool = False) -> List[str]:
	"""Column headers for the selected output options."""
	headers = list(BASE_HEADERS)
	if show_secret:
		headers += SECRET_HEADERS
	if validity:
		headers += VALIDITY_HEADERS
	if verbose:
		headers += VERBOSE_HEADERS
	return headers


def alert_row(alert: Alert, show_secret: bool = False, validity: bool = False,
              verbose: bool = False) -> List[str]:
	"""One row of cell values, matching alert_headers()."""
	row = [
	    alert.repository.full_name,
	    str(alert.number),
	    alert.state,
	    alert.secret_type,
	]
	if show_secret:
		row.append(alert.secret or "")
	if validity:
		row += [_flag(alert.validity_boolean), alert.validity_response_code]
	if verbose:
		row += [
		    alert.created_at,
		    alert.resolution or "",
		    alert.resolved_at or "",
		    _login(alert.resolved_by),
		    _flag(alert.push_protection_bypassed),
		    alert.push_protection_bypassed_at or "",
		    _login(alert.push_protection_bypassed_by),
		    alert.html_url,
		]
	return row


def report_filename(scope: str, now: datetime | None = None) -> str:
	"""CSV report file name for a scope and timestamp."""
	timestamp = (now or datetime.now()).strftime("%Y-%m-%d %H-%M-%S")
	return f"Secret Scanning Report - {scope} - {timestamp}.csv"


def write_csv_report(
    path: Path | str,
    alerts: Sequence[Alert],
    limit: int | None = None,
    show_secret: bool = False,
    validity: bool = False,
    verbose: bool = False,
) -> Path:
	"""
	Write alerts to a CSV file, ensuring parent directories.

	Parameters:
		path: Destination file path.
		alerts: Alerts in report order.
		limit: Maximum rows to write.
		show_secret: Include the secret value column.
		validity: Include the validity columns.
		verbose: Include the extended alert columns.

	Returns:
		The written path.

	Raises:
		OSError: If the file cannot be written.
	"""
	out = Path(path)
	out.parent.mkdir(parents=True, exist_ok=True)
	rows = alerts if limit is None else alerts[:limit]
	with out.open("w", newline="", encoding="utf-8") as fh:
		writer = csv.writer(fh)
		writer.writerow(alert_headers(show_secret, validity, verbose))
		for alert in rows:
			writer.writerow(alert_row(alert, show_secret, validity, verbose))
	return out


__all__ = [
    "alert_headers",
    "alert_row",
    "report_filename",
    "write_csv_report",
]
