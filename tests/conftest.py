"""Pytest configuration for the stockprice-exporter test suite."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator

import httpx
import pytest

from stockprice_exporter.core.fetcher import QuoteFetcher

SAMPLE_HEADER = [
    "EXCHANGE%3DTYO",
    "MARKET_OPEN_MINUTE=540",
    "MARKET_CLOSE_MINUTE=900",
    "INTERVAL=300",
    "COLUMNS=DATE,CLOSE,HIGH,LOW,OPEN,VOLUME",
    "DATA=",
    "TIMEZONE_OFFSET=540",
]
SAMPLE_RECORD = "a1508112000,100.5,101,98.5,99,12345"


class TrackingStream(httpx.SyncByteStream):
    """Response body yielding one line per chunk and remembering how far it was read."""

    def __init__(self, lines: list[str], delay: float = 0.0) -> None:
        self.lines = lines
        self.delay = delay
        self.chunks_read = 0
        self.closed = False

    def __iter__(self) -> Iterator[bytes]:
        for line in self.lines:
            if self.delay:
                time.sleep(self.delay)
            self.chunks_read += 1
            yield f"{line}\n".encode()

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def quote_lines() -> list[str]:
    """A realistic upstream payload: seven header lines then two data rows."""

    return [*SAMPLE_HEADER, SAMPLE_RECORD, "1,100.75,101.5,100,100.5,2000"]


@pytest.fixture
def tracking_stream() -> type[TrackingStream]:
    return TrackingStream


@pytest.fixture
def make_fetcher() -> Iterator[Callable[..., QuoteFetcher]]:
    """Build fetchers whose upstream is served by ``handler``."""

    clients: list[httpx.Client] = []

    def factory(handler: Callable[[httpx.Request], httpx.Response], **kwargs: object) -> QuoteFetcher:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return QuoteFetcher(client=client, **kwargs)

    yield factory

    for client in clients:
        client.close()


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests that reach the real upstream feed.",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: marks tests requiring network access to the upstream feed",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--run-integration"):
        return

    skip_integration = pytest.mark.skip(reason="integration tests require --run-integration")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)
