"""Exception handling module."""

from stockprice_exporter.core.exceptions.base import (
    ExporterError,
    FetchError,
    FetchTimeoutError,
    InsufficientFieldsError,
    InvalidNumberError,
    NoRecordFoundError,
    ParseError,
    TransportError,
)

__all__ = [
    "ExporterError",
    "FetchError",
    "TransportError",
    "FetchTimeoutError",
    "NoRecordFoundError",
    "ParseError",
    "InsufficientFieldsError",
    "InvalidNumberError",
]
