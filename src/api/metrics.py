from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter(
    prefix="/metrics",
    tags=["Monitoring"]
)

@router.get("")
async def metrics_endpoint():
    """
    Exposes the exporter's own Prometheus metrics.
    Device metrics are served per target from /probe.
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
