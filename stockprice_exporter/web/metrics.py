"""FastAPI utilities for Prometheus metrics exposure."""

from fastapi import APIRouter, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest


def create_metrics_router(path: str = "/metrics") -> APIRouter:
    """Build a router serving the application registry at ``path``."""

    router = APIRouter()

    # Sync handler: each scrape runs in the threadpool, so a slow upstream
    # blocks only its own request.
    @router.get(path, include_in_schema=False, summary="Prometheus metrics endpoint")
    def metrics_endpoint(request: Request) -> Response:
        """Expose collected metrics in Prometheus text format."""

        registry = request.app.state.registry
        return Response(content=generate_latest(registry), media_type=CONTENT_TYPE_LATEST)

    return router
