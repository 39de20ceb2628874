"""Exporter configuration: defaults, validation and environment loading."""

import os
from dataclasses import asdict, dataclass
from typing import Any

from stockprice_exporter.core.fetcher import DEFAULT_TIMEOUT, DEFAULT_URL_TEMPLATE

ENV_PREFIX = "STOCKPRICE_EXPORTER_"


@dataclass
class ExporterConfig:
    """Runtime settings for one exporter process."""

    listen_address: str = ":9010"
    metrics_path: str = "/metrics"
    ticker_symbol: str = "0"
    exchange_code: str = "TYO"
    request_timeout: float = DEFAULT_TIMEOUT
    url_template: str = DEFAULT_URL_TEMPLATE
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        if not self.metrics_path.startswith("/"):
            raise ValueError("metrics_path must start with '/'")
        if self.metrics_path == "/":
            raise ValueError("metrics_path must not be the landing page path '/'")
        host, sep, port = self.listen_address.rpartition(":")
        if not sep or not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError(f"listen_address must be 'host:port', got {self.listen_address!r}")

    @property
    def host(self) -> str:
        """Bind host; an empty host in ``:port`` means all interfaces."""
        host = self.listen_address.rpartition(":")[0]
        return host.strip("[]") or "0.0.0.0"

    @property
    def port(self) -> int:
        return int(self.listen_address.rpartition(":")[2])

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "ExporterConfig":
        """Create a config from a plain dict, ignoring unknown keys."""
        known = {key: value for key, value in config_dict.items() if key in cls.__dataclass_fields__}
        return cls(**known)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_config_from_env() -> dict[str, Any]:
    """Read ``STOCKPRICE_EXPORTER_*`` variables into a config dict."""
    config: dict[str, Any] = {}

    for key in ("listen_address", "metrics_path", "ticker_symbol", "exchange_code", "log_level"):
        value = os.getenv(f"{ENV_PREFIX}{key.upper()}")
        if value is not None:
            config[key] = value

    request_timeout = os.getenv(f"{ENV_PREFIX}REQUEST_TIMEOUT")
    if request_timeout is not None:
        config["request_timeout"] = float(request_timeout)

    return config


def build_config(**overrides: Any) -> ExporterConfig:
    """Merge defaults, environment and explicit overrides (``None`` values are ignored)."""
    config_dict = load_config_from_env()
    config_dict.update({key: value for key, value in overrides.items() if value is not None})
    return ExporterConfig.from_dict(config_dict)
