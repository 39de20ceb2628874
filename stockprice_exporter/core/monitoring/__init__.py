"""Monitoring module - quote gauges and the scrape collector."""

from stockprice_exporter.core.monitoring.collector import QuoteCollector
from stockprice_exporter.core.monitoring.metrics import NAMESPACE, QuoteMetricSet, ScrapeStats

__all__ = ["NAMESPACE", "QuoteCollector", "QuoteMetricSet", "ScrapeStats"]
