"""Alert ordering and repository backfill."""

from __future__ import annotations

from typing import Iterable, List, Optional

from gh_secret_scanning.models.alert import Alert


def stamp_repository(alerts: Iterable[Alert], full_name: str) -> List[Alert]:
	"""Set repository identity on alerts from a single-repository listing."""
	name = full_name.split("/", 1)[-1]
	return [
	    alert.model_copy(update={
	        "repository":
	        alert.repository.model_copy(update={
	            "full_name": full_name,
	            "name": alert.repository.name or name,
	        })
	    }) for alert in alerts
	]


def sort_alerts(alerts: Iterable[Alert]) -> List[Alert]:
	"""Sort by (repository full name, alert number) ascending."""
	return sorted(alerts, key=lambda a: a.sort_key)


def normalize_alerts(alerts: Iterable[Alert],
                     repository: Optional[str] = None) -> List[Alert]:
	"""
	Return alerts in canonical order.

	Parameters:
		alerts: Alerts as fetched.
		repository: owner/repo slug when the source was a repository
			endpoint, which omits repository identity.

	Returns:
		New sorted list; inputs are not modified.
	"""
	if repository:
		alerts = stamp_repository(alerts, repository)
	return sort_alerts(alerts)


__all__ = ["stamp_repository", "sort_alerts", "normalize_alerts"]
