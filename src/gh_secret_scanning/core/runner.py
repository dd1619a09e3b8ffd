"""
Pipeline orchestration.

Connects retrieval, normalization and verification:
paginate -> normalize -> verify.
"""

from __future__ import annotations

from functools import partial
from typing import Dict, List

from ghapi.core import GhApi

from gh_secret_scanning.core.normalizer import normalize_alerts
from gh_secret_scanning.core.paginator import paginate
from gh_secret_scanning.core.verifier import verify_alerts
from gh_secret_scanning.integrations.github import alerts_api_path, fetch_page
from gh_secret_scanning.integrations.probe import ProbeSession
from gh_secret_scanning.models.alert import Alert
from gh_secret_scanning.models.config import Config
from gh_secret_scanning.models.outcome import VerifyOutcome
from gh_secret_scanning.models.run_params import RunParams, SCOPE_REPOSITORY
from gh_secret_scanning.registry import secret_types_for
from gh_secret_scanning.utils.logging import get_logger

logger = get_logger(__name__)


def alerts_query(provider: str | None, supported_only: bool,
                 include_secret: bool = True) -> Dict[str, str]:
	"""
	Build listing query parameters.

	Parameters:
		provider: Restrict to one provider's secret types.
		supported_only: Request every registered secret type when no
			provider is given; otherwise all secret types are listed.
		include_secret: Ask GitHub to return secret values.

	Returns:
		Query parameters without ``per_page``.
	"""
	query: Dict[str, str] = {}
	if provider or supported_only:
		query["secret_type"] = ",".join(secret_types_for(provider))
	if not include_secret:
		query["hide_secret"] = "true"
	return query


def fetch_alerts(api: GhApi, config: Config, run_params: RunParams,
                 supported_only: bool = False,
                 include_secret: bool = True) -> List[Alert]:
	"""
	Retrieve and normalize alerts for the selected scope.

	Parameters:
		api: GhApi client for the configured host.
		config: Application configuration (limit, timeouts).
		run_params: Validated run parameters.
		supported_only: Only request registered secret types.
		include_secret: Ask GitHub to return secret values.

	Returns:
		Alerts sorted by (repository, number).

	Raises:
		RetrievalError: If any page fails.
	"""
	rp = run_params
	path = alerts_api_path(rp.scope, rp.target)
	logger.info("fetching alerts scope=%s target=%s limit=%d", rp.scope,
	            rp.target, config.limit)
	fetch = partial(fetch_page, api)
	alerts = paginate(
	    fetch,
	    path,
	    config.limit,
	    query=alerts_query(rp.provider, supported_only, include_secret),
	)
	repository = rp.repository if rp.scope == SCOPE_REPOSITORY else None
	return normalize_alerts(alerts, repository=repository)


async def run_verify(
    api: GhApi,
    config: Config,
    run_params: RunParams,
    session: ProbeSession | None = None,
) -> VerifyOutcome:
	"""
	Fetch alerts for registered secret types and verify them.

	Retrieval errors propagate; verification errors are per alert.

	Parameters:
		api: GhApi client for the configured host.
		config: Application configuration.
		run_params: Validated run parameters.
		session: Optional HTTP session for validation probes.

	Returns:
		VerifyOutcome with alerts in (repository, number) order.
	"""
	alerts = fetch_alerts(api, config, run_params, supported_only=True)
	verified, timed_out = await verify_alerts(
	    alerts,
	    session=session,
	    host=config.host,
	    request_timeout=config.request_timeout_seconds,
	    max_parallel=config.max_parallel_verifications,
	    batch_timeout=config.verify_timeout_seconds,
	)
	outcome = VerifyOutcome(alerts=verified, timed_out=timed_out)
	logger.info("verified %d alerts, %d valid", len(verified),
	            outcome.valid_count)
	return outcome


__all__ = ["alerts_query", "fetch_alerts", "run_verify"]
