"""Configuration management module."""

from stockprice_exporter.core.config.settings import (
    ENV_PREFIX,
    ExporterConfig,
    build_config,
    load_config_from_env,
)

__all__ = ["ENV_PREFIX", "ExporterConfig", "build_config", "load_config_from_env"]
