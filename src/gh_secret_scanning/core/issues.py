"""
Remediation issue creation.

Groups confirmed-valid alerts per repository and opens one issue per
repository through the ``gh`` command line tool.
"""

from __future__ import annotations

import asyncio
import os
from itertools import groupby
from string import Template
from typing import Iterable, List, Sequence

from gh_secret_scanning.errors import IssueCreationError
from gh_secret_scanning.models.alert import Alert
from gh_secret_scanning.models.config import DEFAULT_HOST, normalize_host
from gh_secret_scanning.models.issue import RemediationIssue
from gh_secret_scanning.utils.logging import get_logger

logger = get_logger(__name__)

ISSUE_TITLE = "Secret scanning: {count} valid secret(s) detected"

ISSUE_BODY_TEMPLATE = Template("""## Valid secrets detected in ${repository}

Secret scanning found secrets in this repository that are still accepted
by their provider. Anyone with read access to the history can use them.

| ID | Secret Type | Created At | URL |
| -- | ----------- | ---------- | --- |
${rows}

### Remediation

1. Revoke or rotate each secret with its provider.
2. Review the provider's audit logs for use of the leaked credential.
3. Close the secret scanning alert with the appropriate resolution.
""")


def _escape_cell(value: str) -> str:
	return value.replace("|", "\\|").replace("\n", " ")


def render_issue_body(repository: str, alerts: Sequence[Alert]) -> str:
	"""Render the markdown body for a repository's valid alerts."""
	rows = "\n".join(f"| {a.number} | {_escape_cell(a.secret_type)} | "
	                 f"{_escape_cell(a.created_at)} | "
	                 f"{_escape_cell(a.html_url)} |" for a in alerts)
	return ISSUE_BODY_TEMPLATE.safe_substitute(repository=repository,
	                                           rows=rows)


def group_valid_alerts(alerts: Iterable[Alert],
                       host: str = DEFAULT_HOST) -> List[RemediationIssue]:
	"""
	Build one issue per repository with at least one valid secret.

	Parameters:
		alerts: Verified alerts.
		host: GitHub host used to qualify the repository.

	Returns:
		Issues in repository order.
	"""
	valid = sorted((a for a in alerts if a.validity_boolean),
	               key=lambda a: a.sort_key)
	qualified_host = normalize_host(host)
	issues: List[RemediationIssue] = []
	for full_name, group in groupby(valid,
	                                key=lambda a: a.repository.full_name):
		repo_alerts = list(group)
		issues.append(
		    RemediationIssue(
		        repository=f"{qualified_host}/{full_name}",
		        title=ISSUE_TITLE.format(count=len(repo_alerts)),
		        body=render_issue_body(full_name, repo_alerts),
		        alerts=repo_alerts,
		    ))
	return issues


async def create_issue(issue: RemediationIssue) -> None:
	"""
	Open a single issue with ``gh issue create``.

	Raises:
		IssueCreationError: If gh is missing or exits non-zero.
	"""
	try:
		proc = await asyncio.create_subprocess_exec(
		    "gh",
		    "issue",
		    "create",
		    "--repo",
		    issue.repository,
		    "--title",
		    issue.title,
		    "--body",
		    issue.body,
		    stdout=asyncio.subprocess.PIPE,
		    stderr=asyncio.subprocess.PIPE,
		    env={
		        **os.environ, "GH_PROMPT_DISABLED": "1"
		    },
		)
	except OSError as exc:
		raise IssueCreationError(issue.repository, str(exc)) from exc
	stdout, stderr = await proc.communicate()
	if proc.returncode != 0:
		raise IssueCreationError(
		    issue.repository,
		    f"gh exited with {proc.returncode}: "
		    f"{stderr.decode(errors='replace')[:500]}")
	logger.info("created issue %s", stdout.decode(errors="replace").strip())


async def create_issues(issues: Sequence[RemediationIssue]) -> int:
	"""
	Open every issue, continuing past failures.

	Returns:
		Number of issues created.
	"""
	created = 0
	for issue in issues:
		try:
			await create_issue(issue)
		except IssueCreationError as exc:
			logger.warning("%s", exc)
			continue
		created += 1
	return created


__all__ = [
    "render_issue_body",
    "group_valid_alerts",
    "create_issue",
    "create_issues",
]
