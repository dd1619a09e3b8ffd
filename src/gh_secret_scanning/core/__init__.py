"""Core alert collection and validation pipeline.

Key modules:
    - paginator: Link-header pagination with a result cap
    - normalizer: Canonical ordering and repository backfill
    - verifier: Provider-keyed live secret verification
    - issues: Remediation issues for repositories with live secrets
    - runner: fetch_alerts() and run_verify()
"""

from gh_secret_scanning.core.paginator import paginate, page_size, max_pages
from gh_secret_scanning.core.normalizer import (
    normalize_alerts,
    sort_alerts,
    stamp_repository,
)
from gh_secret_scanning.core.verifier import (
    classify_response,
    verify_alert,
    verify_alerts,
)
from gh_secret_scanning.core.issues import (
    group_valid_alerts,
    create_issues,
)
from gh_secret_scanning.core.runner import fetch_alerts, run_verify

__all__ = [
    # paginator
    "paginate",
    "page_size",
    "max_pages",
    # normalizer
    "normalize_alerts",
    "sort_alerts",
    "stamp_repository",
    # verifier
    "classify_response",
    "verify_alert",
    "verify_alerts",
    # issues
    "group_valid_alerts",
    "create_issues",
    # runner
    "fetch_alerts",
    "run_verify",
]
