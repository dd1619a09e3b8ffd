"""
GitHub API utilities.

Provides the GhApi client factory, the secret scanning listing paths
for each scope, and a single-page fetch that surfaces the Link header
used for cursor pagination.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from fastcore.xtras import obj2dict
from ghapi.core import GhApi

from gh_secret_scanning.errors import RetrievalError
from gh_secret_scanning.models.config import (
    DEFAULT_HOST,
    is_default_host,
    normalize_host,
)
from gh_secret_scanning.models.run_params import (
    SCOPE_ENTERPRISE,
    SCOPE_ORGANIZATION,
    SCOPE_REPOSITORY,
)

DEFAULT_UA = "gh-secret-scanning"

ENTERPRISE_ALERTS_PATH = "/enterprises/{enterprise}/secret-scanning/alerts"
ORGANIZATION_ALERTS_PATH = "/orgs/{org}/secret-scanning/alerts"
REPOSITORY_ALERTS_PATH = "/repos/{owner}/{repo}/secret-scanning/alerts"


def api_base_url(host: str = DEFAULT_HOST) -> str:
	"""REST API root for a host: api.github.com or <host>/api/v3."""
	if is_default_host(host):
		return f"https://api.{DEFAULT_HOST}"
	return f"https://{normalize_host(host)}/api/v3"


def get_github_client(token: str | None, host: str = DEFAULT_HOST,
                      user_agent: str = DEFAULT_UA,
                      timeout: float = 30) -> GhApi:
	"""
	Construct a blocking GhApi client for the given host.

	Parameters:
		token: Token for the listing endpoints; GhApi falls back to
			GITHUB_TOKEN when None.
		host: GitHub host; anything but github.com targets /api/v3.
		user_agent: User-Agent sent with every request.
		timeout: Per-request timeout in seconds.
	"""
	api = GhApi(token=token, gh_host=api_base_url(host), timeout=timeout,
	            sync=True)
	api.transport.base_headers["User-Agent"] = user_agent
	return api


def alerts_api_path(scope: str, target: str) -> str:
	"""
	Build the listing path for a scope.

	Parameters:
		scope: enterprise, organization or repository.
		target: Enterprise slug, organization slug or owner/repo.

	Returns:
		API path relative to the REST root.

	Raises:
		ValueError: If the scope is unknown or the repository slug
			is not owner/repo.
	"""
	if scope == SCOPE_ENTERPRISE:
		return ENTERPRISE_ALERTS_PATH.format(enterprise=target)
	if scope == SCOPE_ORGANIZATION:
		return ORGANIZATION_ALERTS_PATH.format(org=target)
	if scope == SCOPE_REPOSITORY:
		owner, sep, repo = target.partition("/")
		if not sep or not owner or not repo or "/" in repo:
			raise ValueError(f"repository must be owner/repo, got {target!r}")
		return REPOSITORY_ALERTS_PATH.format(owner=owner, repo=repo)
	raise ValueError(f"Invalid API target scope: {scope}")


def _wrap_error(exc: Exception, path: str) -> RetrievalError:
	# httpx status errors carry the response; APIError carries status_code
	response = getattr(exc, "response", None)
	status = getattr(response, "status_code", None) or getattr(
	    exc, "status_code", None)
	if not isinstance(status, int):
		status = None
	# transport messages append the response body after the first line
	lines = str(exc).splitlines()
	message = lines[0] if lines else type(exc).__name__
	return RetrievalError(message, path=path, status=status)


def _link_header(api: Any) -> Optional[str]:
	headers = getattr(api, "recv_hdrs", None) or {}
	return headers.get("Link") or headers.get("link")


def fetch_page(api: GhApi, path: str,
               query: Dict[str, str] | None = None
              ) -> Tuple[List[dict], Optional[str]]:
	"""
	Fetch one page of alerts.

	Parameters:
		api: Blocking GhApi client from get_github_client().
		path: API path, or the absolute URL of a next page.
		query: Query parameters; None for next-page URLs, which
			already carry them.

	Returns:
		Tuple of (alert dicts, raw Link header or None).

	Raises:
		RetrievalError: On transport failure, non-2xx response or
			a body that is not a list of alerts.
	"""
	try:
		body = api(path, "GET", query=query or None)
	except Exception as exc:  # noqa: BLE001
		raise _wrap_error(exc, path) from exc
	# GhApi decodes JSON arrays into an L of AttrDicts
	items = obj2dict(body)
	if not isinstance(items, list):
		raise RetrievalError("unexpected response body, expected a list",
		                     path=path)
	if not all(isinstance(item, dict) for item in items):
		raise RetrievalError("undecodable alert in page: expected objects",
		                     path=path)
	return items, _link_header(api)


__all__ = [
    "DEFAULT_UA",
    "api_base_url",
    "get_github_client",
    "alerts_api_path",
    "fetch_page",
]
