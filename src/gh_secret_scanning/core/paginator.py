"""
Alert pagination.

Drives repeated calls to one listing endpoint, following Link header
cursors until the source is exhausted or the caller's limit is met.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Protocol, Tuple

from ghapi.page import parse_link_hdr
from pydantic import ValidationError

from gh_secret_scanning.errors import RetrievalError
from gh_secret_scanning.models.alert import Alert
from gh_secret_scanning.utils.logging import get_logger

logger = get_logger(__name__)

MAX_PER_PAGE = 100


class PageFetcher(Protocol):
	"""Fetch one page: returns (items, raw Link header)."""

	def __call__(
	    self, path: str, query: Dict[str, str] | None
	) -> Tuple[List[dict], Optional[str]]:
		...


def page_size(limit: int) -> int:
	"""Items requested per page for a limit."""
	return min(limit, MAX_PER_PAGE)


def max_pages(limit: int) -> int:
	"""Hard cap on page fetches for a limit."""
	return math.ceil(limit / page_size(limit))


def next_page_url(link: str | None) -> Optional[str]:
	"""
	Return the ``rel="next"`` URL of a Link header, if any.

	A header that cannot be parsed ends pagination like a missing one.
	"""
	if not link:
		return None
	try:
		links = parse_link_hdr(link)
	except Exception as exc:  # noqa: BLE001
		logger.warning("ignoring malformed Link header %r: %s", link, exc)
		return None
	return links.get("next", (None,))[0]


def paginate(fetch: PageFetcher, path: str, limit: int,
             query: Dict[str, str] | None = None) -> List[Alert]:
	"""
	Collect up to ``limit`` alerts from a paginated listing.

	The loop stops when there is no ``rel="next"`` link, when enough
	items were collected, or after ``max_pages(limit)`` fetches even if
	the Link header keeps pointing somewhere.

	Parameters:
		fetch: Page fetcher.
		path: Listing path for the first page.
		limit: Maximum number of alerts to return.
		query: Extra query parameters for the first page.

	Returns:
		Alerts in source order, at most ``limit`` of them.

	Raises:
		ValueError: If limit is not positive.
		RetrievalError: If any page fails; earlier pages are dropped.
	"""
	if limit <= 0:
		raise ValueError("limit must be > 0")
	per_page = page_size(limit)
	pages = max_pages(limit)
	request_path = path
	request_query: Dict[str, str] | None = {
	    **(query or {}), "per_page": str(per_page)
	}
	collected: List[Alert] = []
	for page in range(1, pages + 1):
		logger.info("processing page %d (max %d) of %s", page, pages, path)
		items, link = fetch(request_path, request_query)
		try:
			collected.extend(Alert.model_validate(item) for item in items)
		except ValidationError as exc:
			raise RetrievalError(f"undecodable alert in page {page}: {exc}",
			                     path=request_path) from exc
		if len(collected) >= limit:
			break
		next_url = next_page_url(link)
		if not next_url:
			break
		# the next link already carries every query parameter
		request_path, request_query = next_url, None
	logger.info("fetched %d alerts from %s", len(collected), path)
	return collected[:limit]


__all__ = [
    "MAX_PER_PAGE",
    "PageFetcher",
    "page_size",
    "max_pages",
    "next_page_url",
    "paginate",
]
