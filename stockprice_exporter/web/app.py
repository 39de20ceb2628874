"""
FastAPI application factory.

The application owns the exporter's only shared mutable state: one
``CollectorRegistry`` holding the quote collector and scrape statistics,
built here and handed to the routes through ``app.state``.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import CollectorRegistry, GCCollector, PlatformCollector, ProcessCollector

from stockprice_exporter import __version__
from stockprice_exporter.core.config import ExporterConfig, build_config
from stockprice_exporter.core.fetcher import QuoteFetcher
from stockprice_exporter.core.logging import logger
from stockprice_exporter.core.monitoring import QuoteCollector, QuoteMetricSet, ScrapeStats
from stockprice_exporter.web.metrics import create_metrics_router
from stockprice_exporter.web.pages import router as pages_router


def create_app(
    config: ExporterConfig | None = None,
    *,
    registry: CollectorRegistry | None = None,
    fetcher: QuoteFetcher | None = None,
) -> FastAPI:
    """Create the exporter application.

    Args:
        config: Exporter settings; defaults plus environment when omitted.
        registry: Registry to publish into; a fresh one when omitted.
        fetcher: Upstream client; one built from ``config`` when omitted.
            A fetcher passed in is not closed on shutdown.
    """
    config = config or build_config()
    registry = registry or CollectorRegistry()
    owns_fetcher = fetcher is None
    if fetcher is None:
        fetcher = QuoteFetcher(url_template=config.url_template, timeout=config.request_timeout)

    stats = ScrapeStats()
    collector = QuoteCollector(
        fetcher,
        QuoteMetricSet(),
        symbol=config.ticker_symbol,
        exchange=config.exchange_code,
        stats=stats,
    )
    # Collection follows registration order: the quote collector refreshes
    # first so the stats below describe this scrape.
    registry.register(collector)
    registry.register(stats)
    ProcessCollector(registry=registry)
    PlatformCollector(registry=registry)
    GCCollector(registry=registry)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(
            f"Exporting {config.ticker_symbol} on {config.exchange_code} at {config.metrics_path}"
        )
        yield
        if owns_fetcher:
            fetcher.close()

    app = FastAPI(
        title="StockPrice Exporter",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.registry = registry
    app.state.collector = collector

    app.include_router(create_metrics_router(config.metrics_path))
    app.include_router(pages_router)
    return app
