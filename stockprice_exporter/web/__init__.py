"""
Web module - FastAPI service exposing the metrics endpoint.
"""

from stockprice_exporter.web.app import create_app

__all__ = ["create_app"]
