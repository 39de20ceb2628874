"""Core fetch, parse and publish pipeline."""

from stockprice_exporter.core.fetcher import QuoteFetcher, build_quote_url, select_record_line
from stockprice_exporter.core.models import MetricName, QuoteRecord
from stockprice_exporter.core.parsing import parse_quote_line

__all__ = [
    "MetricName",
    "QuoteFetcher",
    "QuoteRecord",
    "build_quote_url",
    "parse_quote_line",
    "select_record_line",
]
