"""Integration tests for the metrics endpoint and landing page."""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry

from stockprice_exporter.core.config import ExporterConfig
from stockprice_exporter.web.app import create_app


class FlakyUpstream:
    """Serves queued payloads (or status codes) to successive upstream requests."""

    def __init__(self, *responses: str | int) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, int):
            return httpx.Response(response)
        return httpx.Response(200, text=response)


@pytest.fixture
def payload(quote_lines: list[str]) -> str:
    return "\n".join(quote_lines) + "\n"


def _build_client(make_fetcher, upstream: FlakyUpstream, **config: object) -> TestClient:
    app = create_app(
        ExporterConfig(ticker_symbol="7203", exchange_code="TYO", **config),
        registry=CollectorRegistry(),
        fetcher=make_fetcher(upstream),
    )
    return TestClient(app)


def test_metrics_endpoint_exposes_quote_gauges(make_fetcher, payload: str) -> None:
    upstream = FlakyUpstream(payload)

    with _build_client(make_fetcher, upstream) as client:
        response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"] == CONTENT_TYPE_LATEST
    assert "# HELP stockprice_exporter_close" in response.text
    assert "stockprice_exporter_close 100.5" in response.text
    assert "stockprice_exporter_open 99.0" in response.text
    assert "stockprice_exporter_high 101.0" in response.text
    assert "stockprice_exporter_low 98.5" in response.text
    assert "stockprice_exporter_volume 12345.0" in response.text
    assert upstream.requests[0].url.params["q"] == "7203"
    assert upstream.requests[0].url.params["x"] == "TYO"


def test_upstream_failure_still_returns_last_values(make_fetcher, payload: str) -> None:
    upstream = FlakyUpstream(payload, 503, "garbage\n")

    with _build_client(make_fetcher, upstream) as client:
        first = client.get("/metrics")
        second = client.get("/metrics")
        third = client.get("/metrics")

    assert first.status_code == second.status_code == third.status_code == 200
    for response in (second, third):
        assert "stockprice_exporter_close 100.5" in response.text
        assert "stockprice_exporter_volume 12345.0" in response.text
    assert 'stockprice_exporter_scrape_errors_total{error_code="TRANSPORT_ERROR"} 1.0' in third.text
    assert 'stockprice_exporter_scrape_errors_total{error_code="NO_RECORD_FOUND"} 1.0' in third.text


def test_custom_metrics_path(make_fetcher, payload: str) -> None:
    upstream = FlakyUpstream(payload)

    with _build_client(make_fetcher, upstream, metrics_path="/quote-metrics") as client:
        assert client.get("/metrics").status_code == 404
        assert client.get("/quote-metrics").status_code == 200


def test_landing_page_links_metrics(make_fetcher) -> None:
    upstream = FlakyUpstream()

    with _build_client(make_fetcher, upstream, metrics_path="/quote-metrics") as client:
        response = client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "<title>StockPrice Exporter</title>" in response.text
    assert '<a href="/quote-metrics">Metrics</a>' in response.text
    assert upstream.requests == []


def test_each_app_owns_its_registry(make_fetcher, payload: str) -> None:
    first = create_app(ExporterConfig(), fetcher=make_fetcher(FlakyUpstream(payload)))
    second = create_app(ExporterConfig(), fetcher=make_fetcher(FlakyUpstream(payload)))

    assert first.state.registry is not second.state.registry


def _sample(text: str, name: str) -> float:
    for line in text.splitlines():
        if line.startswith(f"{name} "):
            return float(line.split()[-1])
    raise AssertionError(f"{name} not found")


def test_scrape_stats_describe_the_same_scrape(make_fetcher, payload: str) -> None:
    upstream = FlakyUpstream(payload, 503)

    with _build_client(make_fetcher, upstream) as client:
        success = client.get("/metrics").text
        failure = client.get("/metrics").text

    assert _sample(success, "stockprice_exporter_last_success_timestamp_seconds") > 0.0
    assert _sample(success, "stockprice_exporter_scrape_duration_seconds_count") == 1.0
    assert "stockprice_exporter_scrape_errors_total{" not in success
    assert 'stockprice_exporter_scrape_errors_total{error_code="TRANSPORT_ERROR"} 1.0' in failure
    assert _sample(failure, "stockprice_exporter_scrape_duration_seconds_count") == 2.0


def test_runtime_collectors_are_exposed(make_fetcher, payload: str) -> None:
    with _build_client(make_fetcher, FlakyUpstream(payload)) as client:
        response = client.get("/metrics")

    assert "python_info{" in response.text
    assert "python_gc_objects_collected_total" in response.text
