"""Logging utilities."""

from stockprice_exporter.core.logging.config import LogConfig
from stockprice_exporter.core.logging.logger import configure_logging, get_logger, log_context, logger

__all__ = ["LogConfig", "configure_logging", "get_logger", "log_context", "logger"]
