"""Prometheus custom collector refreshing the quote gauges on every scrape."""

from __future__ import annotations

from collections.abc import Callable

from prometheus_client.metrics_core import Metric

from stockprice_exporter.core.exceptions import ExporterError
from stockprice_exporter.core.fetcher import QuoteFetcher
from stockprice_exporter.core.logging import get_logger, log_context
from stockprice_exporter.core.models import QuoteRecord
from stockprice_exporter.core.monitoring.metrics import QuoteMetricSet, ScrapeStats
from stockprice_exporter.core.parsing import parse_quote_line

logger = get_logger(__name__)


class QuoteCollector:
    """Fetch, parse and publish one instrument's quote per scrape.

    ``describe`` never touches the network, so registering the collector is
    safe before the upstream is reachable. ``collect`` always yields the five
    gauges: when the refresh fails the previous values are served unchanged.
    """

    def __init__(
        self,
        fetcher: QuoteFetcher,
        metric_set: QuoteMetricSet,
        *,
        symbol: str,
        exchange: str,
        stats: ScrapeStats | None = None,
        parser: Callable[[str], QuoteRecord] = parse_quote_line,
    ) -> None:
        self.fetcher = fetcher
        self.metric_set = metric_set
        self.symbol = symbol
        self.exchange = exchange
        self.stats = stats
        self.parser = parser

    def describe(self) -> list[Metric]:
        return self.metric_set.describe()

    def collect(self) -> list[Metric]:
        self.refresh()
        return list(self.metric_set.collect())

    def refresh(self) -> QuoteRecord | None:
        """Run one fetch/parse/update cycle.

        Returns the new record, or ``None`` when the cycle failed and the gauges
        were left untouched.
        """
        with log_context(symbol=self.symbol, exchange=self.exchange):
            try:
                record = self._fetch_record()
            except ExporterError as exc:
                if self.stats is not None:
                    self.stats.record_failure(exc.error_code)
                logger.bind(error_code=exc.error_code, details=exc.details).warning(
                    f"Quote refresh failed, serving last known values: {exc.message}"
                )
                return None

            self.metric_set.update(record)
            if self.stats is not None:
                self.stats.record_success()
            logger.bind(date=record.date).debug("Quote refreshed")
            return record

    def _fetch_record(self) -> QuoteRecord:
        if self.stats is None:
            return self.parser(self.fetcher.fetch(self.symbol, self.exchange))
        with self.stats.scrape_duration_seconds.time():
            return self.parser(self.fetcher.fetch(self.symbol, self.exchange))
