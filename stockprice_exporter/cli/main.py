"""Main entry point for the stockprice-exporter command line interface."""

from __future__ import annotations

import typer
import uvicorn

from stockprice_exporter.core.config import build_config
from stockprice_exporter.core.logging import configure_logging, logger
from stockprice_exporter.web.app import create_app as create_web_app


def create_app() -> typer.Typer:
    """Create the Typer application instance."""

    app = typer.Typer(add_completion=False, help="Prometheus exporter for a stock quote")

    @app.command()
    def serve(
        listen_address: str | None = typer.Option(
            None,
            "--web.listen-address",
            "--listen-address",
            help="Address on which to expose metrics and web interface. [default: :9010]",
        ),
        metrics_path: str | None = typer.Option(
            None,
            "--web.telemetry-path",
            "--metrics-path",
            help="Path under which to expose metrics. [default: /metrics]",
        ),
        ticker_symbol: str | None = typer.Option(
            None,
            "--ticker-symbol",
            help="Code identifying a publicly traded corporation on its exchange. [default: 0]",
        ),
        exchange_code: str | None = typer.Option(
            None,
            "--stock-exchange-code",
            help="Stock exchange code passed through to the upstream feed. [default: TYO]",
        ),
        request_timeout: float | None = typer.Option(
            None,
            "--request-timeout",
            help="Upstream request timeout in seconds. [default: 10]",
        ),
        log_level: str | None = typer.Option(
            None,
            "--log-level",
            help="Logging level. [default: INFO]",
        ),
    ) -> None:
        """Serve quote metrics over HTTP."""

        try:
            config = build_config(
                listen_address=listen_address,
                metrics_path=metrics_path,
                ticker_symbol=ticker_symbol,
                exchange_code=exchange_code,
                request_timeout=request_timeout,
                log_level=log_level.upper() if log_level else None,
            )
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc

        configure_logging(level=config.log_level)
        logger.info(f"Starting stockprice-exporter on {config.host}:{config.port}")
        uvicorn.run(create_web_app(config), host=config.host, port=config.port, log_level=config.log_level.lower())

    return app


app = create_app()
