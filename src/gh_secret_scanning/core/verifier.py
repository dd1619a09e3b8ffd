"""
Secret verification engine.

Probes each alert's secret against its issuing provider and records
whether the secret is still live. Failures are per alert: an alert
that cannot be probed stays unconfirmed and the batch carries on.
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

import requests

from gh_secret_scanning.errors import ValidationProbeError
from gh_secret_scanning.integrations.github import api_base_url
from gh_secret_scanning.integrations.probe import (
    ProbeSession,
    new_session,
    send_probe,
)
from gh_secret_scanning.models.alert import Alert
from gh_secret_scanning.models.config import DEFAULT_HOST, is_default_host
from gh_secret_scanning.models.provider import ProviderContract
from gh_secret_scanning.registry import (
    GITHUB_PROVIDER,
    SUPPORTED_PROVIDERS,
    get_contract,
)
from gh_secret_scanning.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProbeResult:
	"""Classification of a single probe."""

	valid: bool
	status_code: Optional[int]
	endpoint: str


def _body_value(value: Any) -> Optional[str]:
	if value is None:
		return None
	if isinstance(value, bool):
		return "true" if value else "false"
	return str(value)


def classify_response(contract: ProviderContract, response: Any) -> bool:
	"""
	Decide whether a probe response means the secret is live.

	With an expected-body predicate the JSON body must hold the
	expected value under the expected key (booleans compare as
	``"true"``/``"false"``). Without one, only HTTP 200 counts.

	Raises:
		ValueError: If a predicate is set and the body is not JSON.
	"""
	if contract.expected_body:
		key, expected = contract.expected_body
		body = response.json()
		if not isinstance(body, dict):
			return False
		return _body_value(body.get(key)) == expected
	return response.status_code == 200


def enterprise_endpoint(host: str) -> str:
	"""GitHub Enterprise Server variant of the GitHub validation endpoint."""
	return api_base_url(host)


def _probe(session: ProbeSession, contract: ProviderContract, secret: str,
           endpoint: str, timeout: float | None) -> ProbeResult:
	response = send_probe(session, contract, secret, endpoint=endpoint,
	                      timeout=timeout)
	return ProbeResult(
	    valid=classify_response(contract, response),
	    status_code=getattr(response, "status_code", None),
	    endpoint=endpoint,
	)


def verify_alert(alert: Alert, session: ProbeSession,
                 host: str = DEFAULT_HOST,
                 timeout: float | None = None) -> Alert:
	"""
	Verify one alert.

	Parameters:
		alert: Alert to verify.
		session: HTTP session used for the probe.
		host: Configured GitHub host; a non-default host enables the
			GitHub Enterprise Server fallback for GitHub tokens.
		timeout: Per-request timeout in seconds.

	Returns:
		A copy of the alert with validity fields set, or the alert
		unchanged when it could not be probed.
	"""
	provider = alert.provider
	if provider not in SUPPORTED_PROVIDERS:
		logger.debug("alert %s/%d: provider %r not supported, skipping",
		             alert.repository.full_name, alert.number, provider)
		return alert
	contract = get_contract(provider, alert.secret_type)
	if contract is None:
		logger.debug("alert %s/%d: secret type %r not supported, skipping",
		             alert.repository.full_name, alert.number,
		             alert.secret_type)
		return alert
	if not alert.secret:
		logger.warning("alert %s/%d: no secret value returned, skipping",
		               alert.repository.full_name, alert.number)
		return alert

	endpoint = contract.validation_endpoint
	try:
		result = _probe(session, contract, alert.secret, endpoint, timeout)
	except ValidationProbeError as exc:
		logger.warning("alert %s/%d: %s", alert.repository.full_name,
		               alert.number, exc)
		return alert
	# requests' JSONDecodeError is both a ValueError and a RequestException
	except ValueError as exc:
		logger.warning("alert %s/%d: unable to decode response from %s: %s",
		               alert.repository.full_name, alert.number, endpoint,
		               exc)
		return alert
	except requests.RequestException as exc:
		logger.warning("alert %s/%d: unable to send %s request to %s: %s",
		               alert.repository.full_name, alert.number,
		               contract.http_method, endpoint, exc)
		return alert

	if (not result.valid and provider == GITHUB_PROVIDER
	    and not is_default_host(host)):
		fallback = enterprise_endpoint(host)
		logger.info("alert %s/%d: retrying against %s",
		            alert.repository.full_name, alert.number, fallback)
		try:
			result = _probe(session, contract, alert.secret, fallback,
			                timeout)
		except (requests.RequestException, ValueError) as exc:
			logger.warning("alert %s/%d: enterprise fallback to %s failed: %s",
			               alert.repository.full_name, alert.number,
			               fallback, exc)

	return alert.model_copy(
	    update={
	        "validity_boolean":
	        result.valid,
	        "validity_response_code":
	        str(result.status_code) if result.status_code is not None else "",
	        "validity_endpoint":
	        result.endpoint,
	    })


async def verify_alerts(
    alerts: Sequence[Alert],
    session: ProbeSession | None = None,
    host: str = DEFAULT_HOST,
    request_timeout: float | None = 30,
    max_parallel: int = 8,
    batch_timeout: float | None = None,
) -> tuple[List[Alert], bool]:
	"""
	Verify alerts concurrently, keeping their input order.

	Probes run in worker threads, at most ``max_parallel`` at a time.
	When ``batch_timeout`` expires, outstanding probes are cancelled
	and their alerts are returned unconfirmed.

	Parameters:
		alerts: Normalized alerts.
		session: HTTP session shared by all workers, which must be safe
			to use from several threads. When None, each worker thread
			gets its own session, closed when the batch ends.
		host: Configured GitHub host.
		request_timeout: Per-request timeout in seconds.
		max_parallel: Worker pool size.
		batch_timeout: Deadline for the whole batch in seconds.

	Returns:
		Tuple of (alerts in input order, timed_out flag).
	"""
	results: List[Alert] = list(alerts)
	if not results:
		return results, False
	sem = asyncio.Semaphore(max_parallel)
	local = threading.local()
	owned: List[Any] = []
	owned_lock = threading.Lock()

	def worker_session() -> ProbeSession:
		if session is not None:
			return session
		current = getattr(local, "session", None)
		if current is None:
			current = local.session = new_session()
			with owned_lock:
				owned.append(current)
		return current

	def verify_in_worker(alert: Alert) -> Alert:
		return verify_alert(alert, worker_session(), host, request_timeout)

	async def run_one(idx: int, alert: Alert) -> None:
		async with sem:
			results[idx] = await asyncio.to_thread(verify_in_worker, alert)

	tasks = [
	    asyncio.create_task(run_one(i, alert))
	    for i, alert in enumerate(results)
	]
	try:
		done, pending = await asyncio.wait(tasks, timeout=batch_timeout)
		for task in pending:
			task.cancel()
		if pending:
			logger.warning(
			    "verification timed out after %ss, %d alerts left unverified",
			    batch_timeout, len(pending))
			await asyncio.gather(*pending, return_exceptions=True)
	finally:
		with owned_lock:
			for own in owned:
				own.close()
	for task in done:
		exc = task.exception()
		if exc is not None:
			logger.warning("unexpected verification error: %s", exc,
			               exc_info=exc)
	return results, bool(pending)


__all__ = [
    "ProbeResult",
    "classify_response",
    "enterprise_endpoint",
    "verify_alert",
    "verify_alerts",
]
