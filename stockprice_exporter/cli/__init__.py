"""Command line interface for stockprice-exporter."""

from stockprice_exporter.cli.main import app, create_app

__all__ = ["app", "create_app"]
