"""stockprice_exporter - Prometheus exporter for a single instrument's stock quote.

Every scrape fetches a fresh quote snapshot from the upstream price feed and
republishes close, open, high, low and volume as gauges.
"""

__version__ = "0.1.0"
