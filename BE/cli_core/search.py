"""
Search client
─────────────
Small HTTP client behind the "Add User" action: issues `GET <base_url>?q=...`
and hands back the raw response body for display.

Design goals
------------
• Base URL comes from config.json (`search_url`), then CLI_SEARCH_URL, then a
  public default. Callers can pass their own.
• Conservative timeouts + retries with exponential backoff on 429/5xx.
• The requests.Session is injectable so tests never touch the network.

Usage
-----
from cli_core.search import SearchClient

client = SearchClient()
result = client.search("scala vs kotlin")
print(result.status_code, result.excerpt())
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from .config import search_timeout, search_url_from_env
from .persistence import config_store
from .utils.logging import get_logger

log = get_logger(__name__)

MAX_RETRIES     = 3
BACKOFF_START_S = 0.8  # exponential: 0.8, 1.6, 3.2 ...


class SearchHTTPError(RuntimeError):
    pass


@dataclass
class SearchResult:
    query: str
    url: str
    status_code: int
    content_type: str
    body: str

    def excerpt(self, limit: int = 500) -> str:
        text = self.body.strip()
        if len(text) <= limit:
            return text
        return text[:limit].rstrip() + " …"


def resolve_base_url() -> str:
    """`search_url` from config.json when defined, else the env/default URL."""
    try:
        return str(config_store.get("search_url"))
    except config_store.ConfigKeyError:
        return search_url_from_env()


class SearchClient:
    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        backoff_start: float = BACKOFF_START_S,
    ) -> None:
        self.base_url = (base_url or resolve_base_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else search_timeout()
        self.session = session or requests.Session()
        self.backoff_start = backoff_start
        self.session.headers.update(
            {"User-Agent": "ta-cli/1.0 python-requests"}
        )

    def _get(self, params: Dict[str, Any]) -> requests.Response:
        """
        GET with exponential backoff on rate limits and server errors.

        Raises:
            SearchHTTPError: on client errors or once retries are exhausted
        """
        for attempt in range(MAX_RETRIES):
            last_try = attempt == MAX_RETRIES - 1
            try:
                response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            except requests.RequestException as e:
                if not last_try:
                    log.debug("search request failed (%s), retrying", e)
                    time.sleep(self.backoff_start * (2 ** attempt))
                    continue
                raise SearchHTTPError(f"Request failed after {MAX_RETRIES} attempts: {e}") from e

            if response.status_code == 429 or response.status_code >= 500:
                if not last_try:
                    log.debug("search got HTTP %s, backing off", response.status_code)
                    time.sleep(self.backoff_start * (2 ** attempt))
                    continue
                raise SearchHTTPError(
                    f"HTTP {response.status_code} after {MAX_RETRIES} attempts"
                )

            if not response.ok:
                raise SearchHTTPError(f"HTTP {response.status_code}: {response.text[:200]}")
            return response

        # loop always returns or raises
        raise SearchHTTPError("Unexpected error in request handling")

    def search(self, query: str) -> SearchResult:
        query = query.strip()
        if not query:
            raise ValueError("search query must not be empty")
        log.debug("searching %s for %r", self.base_url, query)
        response = self._get({"q": query})
        return SearchResult(
            query=query,
            url=str(response.url),
            status_code=response.status_code,
            content_type=response.headers.get("Content-Type", ""),
            body=response.text,
        )
