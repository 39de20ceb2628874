"""Structured JSON logging on top of loguru, with per-scrape trace ids."""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import IO, Any, Iterator
from uuid import uuid4

from loguru import logger

from stockprice_exporter.core.logging.config import LogConfig

_TRACE_ID_VAR: ContextVar[str | None] = ContextVar("stockprice_exporter_trace_id", default=None)
_CONTEXT_VAR: ContextVar[dict[str, Any]] = ContextVar("stockprice_exporter_log_context", default={})

_TOP_LEVEL_KEYS = ("trace_id", "error_code", "symbol")


def _ensure_trace_id() -> str:
    trace_id = _TRACE_ID_VAR.get()
    if trace_id is None:
        trace_id = uuid4().hex
        _TRACE_ID_VAR.set(trace_id)
    return trace_id


def _patch_record(record: dict[str, Any]) -> None:
    extra = record.setdefault("extra", {})
    if not extra.get("trace_id"):
        extra["trace_id"] = _ensure_trace_id()

    for key, value in _CONTEXT_VAR.get({}).items():
        if extra.get(key) is None:
            extra[key] = value

    extra.setdefault("symbol", None)
    extra.setdefault("error_code", None)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _format_payload(record: dict[str, Any]) -> dict[str, Any]:
    extra = record.get("extra", {})
    context = {k: v for k, v in extra.items() if k not in _TOP_LEVEL_KEYS}
    level_value = record.get("level")
    level_name = getattr(level_value, "name", None) or str(level_value or "INFO")
    timestamp = record["time"] if "time" in record else datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "timestamp": timestamp.isoformat(),
        "level": level_name,
        "message": record.get("message"),
        "trace_id": extra.get("trace_id"),
        "error_code": extra.get("error_code"),
        "symbol": extra.get("symbol"),
    }
    if context:
        payload["context"] = context
    exception = record.get("exception")
    if exception:
        payload["exception"] = str(exception)
    return payload


class _StreamJsonSink:
    """Sink writing structured JSON payloads to a text stream."""

    def __init__(self, stream: IO[str]) -> None:
        self._stream = stream

    def __call__(self, message: Any) -> None:
        payload = _format_payload(message.record)
        self._stream.write(json.dumps(payload, default=_json_default))
        self._stream.write("\n")
        self._stream.flush()


def configure_logging(level: str = "INFO", **kwargs: Any) -> None:
    """Install the JSON sink at ``level``; ``console_stream`` defaults to stdout."""

    config = LogConfig(level=level, **kwargs)
    stream = config.console_stream or sys.stdout
    logger.configure(
        handlers=[{"sink": _StreamJsonSink(stream), "level": config.level.upper()}],
        patcher=_patch_record,
    )


def get_logger(name: str | None = None):
    """Return the logger, bound to ``name`` when given."""

    if name:
        return logger.bind(logger_name=name)
    return logger


@contextmanager
def log_context(*, trace_id: str | None = None, **extra: Any) -> Iterator[str]:
    """Propagate a trace id and extra fields to every event logged inside the block."""

    context_token = _CONTEXT_VAR.set({**_CONTEXT_VAR.get({}), **extra})
    active_trace = trace_id or uuid4().hex
    trace_token = _TRACE_ID_VAR.set(active_trace)

    try:
        yield active_trace
    finally:
        _TRACE_ID_VAR.reset(trace_token)
        _CONTEXT_VAR.reset(context_token)


configure_logging()


__all__ = ["configure_logging", "get_logger", "log_context", "logger"]
