"""Static landing page."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

router = APIRouter()

_LANDING_PAGE = """<html>
<head><title>StockPrice Exporter</title></head>
<body>
<h1>StockPrice Exporter</h1>
<p><a href="{metrics_path}">Metrics</a></p>
</body>
</html>
"""


@router.get("/", include_in_schema=False, response_class=HTMLResponse)
def landing_page(request: Request) -> HTMLResponse:
    return HTMLResponse(_LANDING_PAGE.format(metrics_path=request.app.state.config.metrics_path))
