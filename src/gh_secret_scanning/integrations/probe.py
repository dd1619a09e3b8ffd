"""
Validation probe transport.

Sends a single read-only request to a provider using a leaked secret
as the bearer credential. The method, content type and endpoint come
from a ProviderContract.
"""

from __future__ import annotations

from http.cookiejar import DefaultCookiePolicy
from typing import Any, Protocol

import requests

from gh_secret_scanning.errors import ValidationProbeError
from gh_secret_scanning.models.provider import ProviderContract

SUPPORTED_METHODS = ("GET", "POST")


class ProbeSession(Protocol):
	"""Subset of ``requests.Session`` used for probes."""

	def request(self, method: str, url: str, **kwargs: Any) -> Any:
		...


def new_session() -> requests.Session:
	"""Create a requests session for validation probes; it keeps no cookies."""
	session = requests.Session()
	session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
	session.headers["User-Agent"] = "gh-secret-scanning"
	return session


def send_probe(session: ProbeSession, contract: ProviderContract,
               secret: str, endpoint: str | None = None,
               timeout: float | None = None) -> Any:
	"""
	Issue a validation request for a secret.

	Parameters:
		session: HTTP session.
		contract: Provider contract for the secret type.
		secret: Leaked secret, sent as a bearer token.
		endpoint: Override for the contract endpoint.
		timeout: Request timeout in seconds.

	Returns:
		The HTTP response.

	Raises:
		ValidationProbeError: If the contract has no endpoint or an
			unsupported method.
		requests.RequestException: On transport failure.
	"""
	url = endpoint or contract.validation_endpoint
	if not url:
		raise ValidationProbeError(
		    f"empty validation endpoint for {contract.secret_type}")
	method = (contract.http_method or "").upper()
	if method not in SUPPORTED_METHODS:
		raise ValidationProbeError(
		    f"unsupported HTTP method {contract.http_method!r} "
		    f"for {contract.secret_type}")
	headers = {
	    "Authorization": f"Bearer {secret}",
	    "Content-Type": contract.content_type,
	}
	kwargs: dict[str, Any] = {"headers": headers, "timeout": timeout}
	if method == "POST":
		kwargs["data"] = b""
	return session.request(method, url, **kwargs)


__all__ = ["ProbeSession", "new_session", "send_probe", "SUPPORTED_METHODS"]
