"""User interface components.

This subpackage provides terminal and file output for alerts.

Key modules:
    - table: Rich-based alert table
    - reporting: Shared columns and CSV persistence
"""

from gh_secret_scanning.ui.table import (
    build_alerts_table,
    fetched_summary,
    render_alerts,
)
from gh_secret_scanning.ui.reporting import (
    alert_headers,
    alert_row,
    report_filename,
    write_csv_report,
)

__all__ = [
    "build_alerts_table",
    "fetched_summary",
    "render_alerts",
    "alert_headers",
    "alert_row",
    "report_filename",
    "write_csv_report",
]
