# ============================================================================
# tests/test_search.py
# SearchClient retries/backoff and base URL resolution (no network)
# ============================================================================

import pytest
import requests

from cli_core.persistence import config_store
from cli_core.search import SearchClient, SearchHTTPError, resolve_base_url


class FakeResponse:
    def __init__(self, status_code=200, text="<html>results</html>", url="http://x/search?q=q"):
        self.status_code = status_code
        self.text = text
        self.url = url
        self.headers = {"Content-Type": "text/html"}

    @property
    def ok(self):
        return self.status_code < 400


class FakeSession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.headers = {}
        self.requests = []

    def get(self, url, params=None, timeout=None):
        self.requests.append((url, params, timeout))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def _client(responses, **kw):
    session = FakeSession(responses)
    client = SearchClient(base_url="http://x/search/", timeout=2, session=session, backoff_start=0, **kw)
    return client, session


def test_search_returns_body_and_sends_query():
    client, session = _client([FakeResponse(text="hello world")])
    result = client.search("  scala vs kotlin ")
    assert result.body == "hello world"
    assert result.status_code == 200
    assert result.content_type == "text/html"
    assert session.requests == [("http://x/search", {"q": "scala vs kotlin"}, 2)]
    assert "ta-cli" in session.headers["User-Agent"]


def test_retries_rate_limit_then_succeeds():
    client, session = _client([FakeResponse(429), FakeResponse(503), FakeResponse(200)])
    assert client.search("q").status_code == 200
    assert len(session.requests) == 3


def test_gives_up_after_max_retries():
    client, _ = _client([FakeResponse(500)] * 3)
    with pytest.raises(SearchHTTPError, match="HTTP 500 after 3 attempts"):
        client.search("q")


def test_client_error_is_not_retried():
    client, session = _client([FakeResponse(404, text="nope")])
    with pytest.raises(SearchHTTPError, match="HTTP 404"):
        client.search("q")
    assert len(session.requests) == 1


def test_connection_errors_are_retried_then_raised():
    boom = requests.ConnectionError("down")
    client, session = _client([boom, boom, boom])
    with pytest.raises(SearchHTTPError, match="Request failed after 3 attempts"):
        client.search("q")
    assert len(session.requests) == 3


def test_empty_query_rejected():
    client, session = _client([])
    with pytest.raises(ValueError):
        client.search("   ")
    assert session.requests == []


def test_excerpt_truncates_long_bodies():
    client, _ = _client([FakeResponse(text="x" * 50)])
    result = client.search("q")
    assert result.excerpt(limit=10) == "x" * 10 + " …"
    assert result.excerpt() == "x" * 50


def test_base_url_prefers_config(state_dir, monkeypatch):
    monkeypatch.setenv("CLI_SEARCH_URL", "http://env/search")
    assert resolve_base_url() == "http://env/search"
    config_store.save_config({"search_url": "http://cfg/search"})
    assert resolve_base_url() == "http://cfg/search"


def test_base_url_default(state_dir, monkeypatch):
    monkeypatch.delenv("CLI_SEARCH_URL", raising=False)
    assert resolve_base_url() == "https://www.google.com/search"
