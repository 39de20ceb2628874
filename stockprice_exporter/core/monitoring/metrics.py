"""Prometheus metric holders for the exporter."""

from __future__ import annotations

from collections.abc import Iterator

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram
from prometheus_client.metrics_core import Metric

from stockprice_exporter.core.models import MetricName, QuoteRecord

NAMESPACE = "stockprice_exporter"

_HELP: dict[MetricName, str] = {
    MetricName.CLOSE: "Close price of the latest quote.",
    MetricName.OPEN: "Open price of the latest quote.",
    MetricName.HIGH: "High price of the latest quote.",
    MetricName.LOW: "Low price of the latest quote.",
    MetricName.VOLUME: "Traded volume of the latest quote.",
}


class QuoteMetricSet:
    """The five quote gauges, holding the values of the last successful parse.

    The gauges are not registered anywhere themselves; they are exposed through
    :class:`~stockprice_exporter.core.monitoring.collector.QuoteCollector`.
    Each gauge is independently thread safe. Two overlapping updates may
    interleave across gauges, which is accepted.
    """

    def __init__(self, namespace: str = NAMESPACE) -> None:
        self.namespace = namespace
        self._gauges: dict[MetricName, Gauge] = {
            name: Gauge(name.value, _HELP[name], namespace=namespace, registry=None)
            for name in MetricName
        }

    def describe(self) -> list[Metric]:
        """Return the metric identities without touching any value."""

        return [family for name in MetricName for family in self._gauges[name].describe()]

    def update(self, record: QuoteRecord) -> None:
        """Set every gauge from a fully parsed record."""

        for name, gauge in self._gauges.items():
            gauge.set(record.value_of(name))

    def collect(self) -> Iterator[Metric]:
        """Yield current gauge samples in order close, open, high, low, volume."""

        for name in MetricName:
            yield from self._gauges[name].collect()


class ScrapeStats:
    """Out-of-band counters describing scrape outcomes.

    The metrics are exposed through ``describe``/``collect`` so the instance
    can be registered after the quote collector: a registry collects in
    registration order, and the stats must reflect the refresh that the same
    scrape just ran.
    """

    def __init__(self, *, registry: CollectorRegistry | None = None, namespace: str = NAMESPACE) -> None:
        self.scrape_errors_total = Counter(
            "scrape_errors_total",
            "Total count of scrapes that failed to refresh the quote.",
            ("error_code",),
            namespace=namespace,
            registry=None,
        )
        self.scrape_duration_seconds = Histogram(
            "scrape_duration_seconds",
            "Duration of upstream fetch and parse per scrape.",
            namespace=namespace,
            buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, float("inf")),
            registry=None,
        )
        self.last_success_timestamp_seconds = Gauge(
            "last_success_timestamp_seconds",
            "Unix time of the last successful quote refresh.",
            namespace=namespace,
            registry=None,
        )
        self._metrics = (
            self.scrape_errors_total,
            self.scrape_duration_seconds,
            self.last_success_timestamp_seconds,
        )
        if registry is not None:
            registry.register(self)

    def describe(self) -> list[Metric]:
        return [family for metric in self._metrics for family in metric.describe()]

    def collect(self) -> Iterator[Metric]:
        for metric in self._metrics:
            yield from metric.collect()

    def record_success(self) -> None:
        self.last_success_timestamp_seconds.set_to_current_time()

    def record_failure(self, error_code: str) -> None:
        self.scrape_errors_total.labels(error_code=error_code).inc()
