"""
Upstream quote fetching.

The upstream answers with a line-oriented payload: seven unconditional
header lines, an optional ``TIMEZONE_OFFSET`` metadata line anywhere after
them, then the data rows. Only the first data row is of interest, so the
response body is streamed and abandoned as soon as that row is found.
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Iterator
from contextlib import closing

import httpx

from stockprice_exporter.core.exceptions import (
    FetchTimeoutError,
    NoRecordFoundError,
    TransportError,
)
from stockprice_exporter.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_URL_TEMPLATE = (
    "https://www.google.com/finance/getprices"
    "?q={symbol}&x={exchange}&i=300&p=1m&f=d,c,v,o,h,l&df=cpct&auto=1&ei=4rrIWJHoIYya0QS1i4IQ"
)
DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "stockprice-exporter/0.1.0"

HEADER_LINES = 7
TIMEZONE_OFFSET_PREFIX = "TIMEZONE_OFFSET"


def build_quote_url(symbol: str, exchange: str, template: str = DEFAULT_URL_TEMPLATE) -> str:
    """Fill the URL template; symbol and exchange are inserted verbatim."""
    return template.format(symbol=symbol, exchange=exchange)


def select_record_line(lines: Iterable[str], *, url: str | None = None) -> str:
    """Return the first line that is neither a header nor a timezone line.

    Consumption stops at the returned line; the rest of ``lines`` is left unread.

    Raises:
        NoRecordFoundError: ``lines`` ran out before a record line was seen.
    """
    lines_read = 0
    for lines_read, line in enumerate(lines, start=1):
        if lines_read <= HEADER_LINES:
            continue
        if line.startswith(TIMEZONE_OFFSET_PREFIX):
            continue
        return line

    raise NoRecordFoundError(
        f"No quote record found after reading {lines_read} lines",
        url=url,
        lines_read=lines_read,
    )


class QuoteFetcher:
    """Synchronous upstream client streaming quote payloads line by line.

    A single instance is shared by all scrapes; ``httpx.Client`` is safe to use
    from several threads, and no per-request state is kept on the fetcher.
    """

    def __init__(
        self,
        url_template: str = DEFAULT_URL_TEMPLATE,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self.url_template = url_template
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            headers={"User-Agent": user_agent},
        )

    def __enter__(self) -> "QuoteFetcher":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client if this fetcher created it."""
        if self._owns_client:
            self._client.close()

    def iter_lines(self, symbol: str, exchange: str) -> Iterator[str]:
        """Yield the response body of one upstream request as text lines.

        The whole request, body included, is bounded by ``timeout``; a line
        arriving after the deadline fails with :class:`FetchTimeoutError`.
        The response is released when the iterator is exhausted, fails, or is
        closed early by the consumer.
        """
        url = build_quote_url(symbol, exchange, self.url_template)
        deadline = time.monotonic() + self.timeout
        try:
            with self._client.stream("GET", url, timeout=self.timeout) as response:
                response.raise_for_status()
                for line in response.iter_lines():
                    if time.monotonic() > deadline:
                        raise FetchTimeoutError(
                            f"Upstream response not complete within {self.timeout}s",
                            url=url,
                            timeout=self.timeout,
                        )
                    yield line
        except httpx.TimeoutException as exc:
            raise FetchTimeoutError(
                f"Upstream request timed out after {self.timeout}s",
                url=url,
                timeout=self.timeout,
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                f"Upstream returned HTTP {exc.response.status_code}",
                url=url,
                status_code=exc.response.status_code,
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"Upstream request failed: {exc}", url=url) from exc

    def fetch(self, symbol: str, exchange: str) -> str:
        """Fetch the payload for ``symbol`` on ``exchange`` and return its record line."""
        url = build_quote_url(symbol, exchange, self.url_template)
        with closing(self.iter_lines(symbol, exchange)) as lines:
            line = select_record_line(lines, url=url)
        logger.debug("Selected quote record line", symbol=symbol, exchange=exchange)
        return line
