"""Core exception types for the stock price exporter."""

from typing import Any


class ExporterError(Exception):
    """Base exception for the exporter."""

    def __init__(
        self,
        message: str,
        error_code: str = "GENERAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        """Initialise the exception.

        Args:
            message: Human readable message.
            error_code: Stable code used for logging and error counters.
            details: Extra context.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class FetchError(ExporterError):
    """Failure while retrieving the upstream quote payload."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        error_code: str = "FETCH_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if url is not None:
            super_details["url"] = url
        super().__init__(message, error_code, super_details)
        self.url = url


class TransportError(FetchError):
    """Network failure or non-2xx upstream response."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if status_code is not None:
            super_details["status_code"] = status_code
        super().__init__(message, url, "TRANSPORT_ERROR", super_details)
        self.status_code = status_code


class FetchTimeoutError(FetchError):
    """Upstream did not answer within the configured request timeout."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        timeout: float | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if timeout is not None:
            super_details["timeout"] = timeout
        super().__init__(message, url, "TIMEOUT", super_details)
        self.timeout = timeout


class NoRecordFoundError(FetchError):
    """Payload ended before any line survived the header filters."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        lines_read: int = 0,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        super_details["lines_read"] = lines_read
        super().__init__(message, url, "NO_RECORD_FOUND", super_details)
        self.lines_read = lines_read


class ParseError(ExporterError):
    """A record line could not be turned into a quote."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        raw_value: str | None = None,
        cause: BaseException | None = None,
        error_code: str = "PARSE_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if field is not None:
            super_details["field"] = field
        if raw_value is not None:
            super_details["raw_value"] = raw_value
        super().__init__(message, error_code, super_details)
        self.field = field
        self.raw_value = raw_value
        self.cause = cause


class InsufficientFieldsError(ParseError):
    """Record line has fewer fields than the quote layout requires."""

    def __init__(self, message: str, expected: int, actual: int, raw_value: str | None = None):
        super().__init__(
            message,
            raw_value=raw_value,
            error_code="INSUFFICIENT_FIELDS",
            details={"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class InvalidNumberError(ParseError):
    """A numeric field is not a finite float."""

    def __init__(
        self,
        message: str,
        field: str,
        raw_value: str,
        cause: BaseException | None = None,
    ):
        super().__init__(
            message,
            field=field,
            raw_value=raw_value,
            cause=cause,
            error_code="INVALID_NUMBER",
        )
