"""HTTP page retrieval for the station reference scraper.

Wraps an ``httpx.Client`` and returns parsed ``BeautifulSoup`` documents.
Every request is a single attempt: the transport is built without retries
and any HTTP 4xx/5xx, transport failure, or timeout surfaces as
``FetchError``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Final

import httpx
from bs4 import BeautifulSoup, ParserRejectedMarkup

logger: Final[logging.Logger] = logging.getLogger(__name__)

_HTML_PARSER: Final[str] = "html.parser"

PageFetcher = Callable[[str], BeautifulSoup]


class FetchError(Exception):
    """Raised when a page cannot be retrieved.

    ``status_code`` is None when the request never produced a response
    (DNS failure, connection reset, timeout).
    """

    def __init__(self, url: str, status_code: int | None, reason: str) -> None:
        self.url: Final[str] = url
        self.status_code: Final[int | None] = status_code
        self.reason: Final[str] = reason
        status: str = f"HTTP {status_code}" if status_code is not None else "request failed"
        super().__init__(f"{status} for {url}: {reason[:200]}")


def build_client(timeout: float, user_agent: str) -> httpx.Client:
    """Construct an httpx client for wiki page requests."""
    transport: httpx.HTTPTransport = httpx.HTTPTransport(retries=0)
    return httpx.Client(
        timeout=timeout,
        transport=transport,
        headers={"User-Agent": user_agent},
        follow_redirects=True,
    )


def parse_html(markup: str) -> BeautifulSoup:
    """Parse an HTML string into a document."""
    return BeautifulSoup(markup, _HTML_PARSER)


def fetch_page(client: httpx.Client, url: str) -> BeautifulSoup:
    """Fetch a URL and parse the response body as HTML.

    Args:
        client: Configured httpx.Client instance.
        url: Page URL.

    Returns:
        Parsed document.

    Raises:
        FetchError: On an invalid URL, HTTP 4xx/5xx responses, transport
            errors, or a body the HTML parser rejects.
    """
    logger.debug("GET %s", url)
    try:
        response: httpx.Response = client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise FetchError(url, None, str(exc) or type(exc).__name__) from exc
    if response.status_code >= 400:
        raise FetchError(url, response.status_code, response.reason_phrase)
    try:
        return parse_html(response.text)
    except ParserRejectedMarkup as exc:
        raise FetchError(url, response.status_code, f"unparseable HTML: {exc}") from exc


def page_fetcher(client: httpx.Client) -> PageFetcher:
    """Bind ``fetch_page`` to a client, yielding a ``url -> document`` callable."""

    def _fetch(url: str) -> BeautifulSoup:
        return fetch_page(client, url)

    return _fetch
