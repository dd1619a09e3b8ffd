import pytest

from gh_secret_scanning.core.paginator import (
    max_pages,
    next_page_url,
    page_size,
    paginate,
)
from gh_secret_scanning.errors import RetrievalError


def _alert(number: int, repo: str = "acme/app") -> dict:
	return {
	    "number": number,
	    "state": "open",
	    "secret_type": "slack_api_token",
	    "repository": {
	        "id": 1,
	        "name": repo.split("/")[1],
	        "full_name": repo
	    },
	}


class FakeFetcher:
	"""Serves pages of alerts and records every call."""

	def __init__(self, total: int, page_len: int | None = None,
	             endless: bool = False):
		self.total = total
		self.page_len = page_len
		self.endless = endless
		self.calls: list[tuple[str, dict | None]] = []

	def __call__(self, path, query):
		self.calls.append((path, query))
		size = self.page_len or int((query or {}).get("per_page", 30))
		start = (len(self.calls) - 1) * size
		items = [_alert(n) for n in range(start + 1,
		                                  min(start + size, self.total) + 1)]
		more = self.endless or start + size < self.total
		link = (f'<https://api.github.com/next?cursor={len(self.calls)}>; '
		        f'rel="next"' if more else None)
		return items, link


def test_page_size_and_cap():
	assert page_size(5) == 5
	assert page_size(250) == 100
	assert max_pages(5) == 1
	assert max_pages(100) == 1
	assert max_pages(101) == 2
	assert max_pages(250) == 3


def test_limit_five_single_fetch():
	fetch = FakeFetcher(total=12)
	alerts = paginate(fetch, "/orgs/acme/secret-scanning/alerts", 5)
	assert len(fetch.calls) == 1
	assert len(alerts) == 5
	assert fetch.calls[0][1]["per_page"] == "5"


def test_follows_next_link_until_exhausted():
	fetch = FakeFetcher(total=12, page_len=5)
	alerts = paginate(fetch, "/orgs/acme/secret-scanning/alerts", 300,
	                  query={"secret_type": "slack_api_token"})
	assert [a.number for a in alerts] == list(range(1, 13))
	assert len(fetch.calls) == 3
	first_path, first_query = fetch.calls[0]
	assert first_path == "/orgs/acme/secret-scanning/alerts"
	assert first_query == {
	    "secret_type": "slack_api_token",
	    "per_page": "100"
	}
	# later pages use the absolute next URL and no extra query
	assert fetch.calls[1] == ("https://api.github.com/next?cursor=1", None)


def test_terminates_on_endless_link_header():
	fetch = FakeFetcher(total=10_000, page_len=1, endless=True)
	alerts = paginate(fetch, "/repos/a/b/secret-scanning/alerts", 250)
	# page_len=1 keeps the item count below the limit
	assert len(fetch.calls) == max_pages(250) == 3
	assert len(alerts) == 3


def test_stops_when_limit_reached():
	fetch = FakeFetcher(total=500, page_len=100, endless=True)
	alerts = paginate(fetch, "/enterprises/e/secret-scanning/alerts", 150)
	assert len(fetch.calls) == 2
	assert len(alerts) == 150


def test_error_discards_partial_results():
	calls = []

	def fetch(path, query):
		calls.append(path)
		if len(calls) == 2:
			raise RetrievalError("boom", path=path, status=502)
		return [_alert(1)], '<https://api.github.com/next>; rel="next"'

	with pytest.raises(RetrievalError, match="502"):
		paginate(fetch, "/orgs/acme/secret-scanning/alerts", 200)


def test_undecodable_item_is_retrieval_error():

	def fetch(path, query):
		return [{"state": "open"}], None

	with pytest.raises(RetrievalError, match="undecodable"):
		paginate(fetch, "/orgs/acme/secret-scanning/alerts", 10)


def test_rejects_non_positive_limit():
	with pytest.raises(ValueError):
		paginate(FakeFetcher(total=1), "/x", 0)


class TestNextPageUrl:
	"""Extraction of the rel="next" target from Link headers."""

	LINK = ('<https://api.github.com/orgs/acme/secret-scanning/alerts?per_page=2'
	        '&after=abc>; rel="next", '
	        '<https://api.github.com/orgs/acme/secret-scanning/alerts?per_page=2'
	        '&before=xyz>; rel="prev"')

	def test_next_of_several(self):
		assert next_page_url(self.LINK).endswith("after=abc")

	def test_missing_header(self):
		assert next_page_url(None) is None
		assert next_page_url("") is None

	def test_no_next_relation(self):
		assert next_page_url('<https://x/y?page=1>; rel="first"') is None

	def test_malformed_header_ends_pagination(self, caplog):
		assert next_page_url("https://x/y; rel=next") is None
		assert "malformed Link header" in caplog.text


def test_malformed_link_stops_after_first_page():
	calls = []

	def fetch(path, query):
		calls.append(path)
		return [_alert(len(calls))], "https://api.github.com/next; rel=next"

	alerts = paginate(fetch, "/orgs/acme/secret-scanning/alerts", 300)
	assert len(calls) == 1
	assert [a.number for a in alerts] == [1]
