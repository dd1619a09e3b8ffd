"""Tests for remediation issue grouping and creation."""

from unittest.mock import AsyncMock, patch

import pytest

from gh_secret_scanning.core.issues import (
    create_issues,
    group_valid_alerts,
    render_issue_body,
)
from gh_secret_scanning.models.alert import Alert
from gh_secret_scanning.models.issue import RemediationIssue


def _alert(number, repo, valid=True, secret="ghp_topsecret"):
	return Alert.model_validate({
	    "number": number,
	    "secret_type": "github_personal_access_token",
	    "secret": secret,
	    "created_at": "2024-01-02T03:04:05Z",
	    "html_url": f"https://github.com/{repo}/security/secret-scanning/{number}",
	    "repository": {
	        "full_name": repo
	    },
	    "validity_boolean": valid,
	})


def _proc(returncode=0, stdout=b"", stderr=b""):
	mock_proc = AsyncMock()
	mock_proc.returncode = returncode
	mock_proc.communicate = AsyncMock(return_value=(stdout, stderr))
	return mock_proc


class TestGroupValidAlerts:
	"""Grouping of valid alerts per repository."""

	def test_one_issue_per_repository(self):
		alerts = [
		    _alert(4, "acme/web"),
		    _alert(1, "acme/api"),
		    _alert(2, "acme/web"),
		    _alert(3, "acme/web", valid=False),
		]
		issues = group_valid_alerts(alerts)
		assert [i.repository for i in issues] == [
		    "github.com/acme/api",
		    "github.com/acme/web",
		]
		assert [a.number for a in issues[1].alerts] == [2, 4]
		assert issues[1].title == "Secret scanning: 2 valid secret(s) detected"

	def test_enterprise_host_qualifies_repository(self):
		issues = group_valid_alerts([_alert(1, "acme/web")],
		                            host="https://ghes.acme.io/")
		assert issues[0].repository == "ghes.acme.io/acme/web"

	def test_no_valid_alerts(self):
		assert group_valid_alerts([_alert(1, "a/b", valid=False)]) == []


def test_body_lists_alerts_without_secret():
	body = render_issue_body("acme/web", [_alert(7, "acme/web")])
	assert "## Valid secrets detected in acme/web" in body
	assert ("| 7 | github_personal_access_token | 2024-01-02T03:04:05Z | "
	        "https://github.com/acme/web/security/secret-scanning/7 |") in body
	assert "ghp_topsecret" not in body
	assert "Revoke or rotate" in body


class TestCreateIssues:
	"""Issue creation through gh."""

	@pytest.mark.asyncio
	async def test_invokes_gh_issue_create(self):
		issue = RemediationIssue(repository="github.com/acme/web",
		                         title="t", body="b", alerts=[])
		with patch(
		    "asyncio.create_subprocess_exec",
		    return_value=_proc(stdout=b"https://github.com/acme/web/issues/1\n"),
		) as mock_exec:
			created = await create_issues([issue])
		assert created == 1
		args = mock_exec.call_args.args
		assert args[:3] == ("gh", "issue", "create")
		assert args[args.index("--repo") + 1] == "github.com/acme/web"
		assert args[args.index("--title") + 1] == "t"
		assert args[args.index("--body") + 1] == "b"
		assert mock_exec.call_args.kwargs["env"]["GH_PROMPT_DISABLED"] == "1"

	@pytest.mark.asyncio
	async def test_failure_does_not_stop_remaining(self, caplog):
		issues = [
		    RemediationIssue(repository=f"github.com/acme/{n}", title="t",
		                     body="b", alerts=[]) for n in ("a", "b")
		]
		with patch(
		    "asyncio.create_subprocess_exec",
		    side_effect=[
		        _proc(returncode=1, stderr=b"HTTP 403"),
		        _proc(),
		    ],
		):
			created = await create_issues(issues)
		assert created == 1
		assert "github.com/acme/a" in caplog.text
		assert "HTTP 403" in caplog.text

	@pytest.mark.asyncio
	async def test_missing_gh_binary(self):
		issue = RemediationIssue(repository="github.com/acme/web", title="t",
		                         body="b", alerts=[])
		with patch(
		    "asyncio.create_subprocess_exec",
		    side_effect=FileNotFoundError("gh"),
		):
			assert await create_issues([issue]) == 0
