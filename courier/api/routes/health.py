"""Health check and metrics endpoints."""

import time
from typing import Literal

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from courier import __version__
from courier.api.dependencies import ToolStoreDep
from courier.api.models.health import ComponentHealth, HealthResponse
from courier.observability.logging import get_logger
from courier.tools.store import ToolStore

logger = get_logger(__name__)

router = APIRouter()
metrics_router = APIRouter()


async def _check_tool_store(store: ToolStore) -> ComponentHealth:
    """Probe the tool store with a cheap read."""
    start = time.perf_counter()
    try:
        await store.list_tool_types()
    except Exception as e:
        logger.warning("tool_store_health_check_failed", error=str(e))
        return ComponentHealth(
            name="tool_store",
            status="unhealthy",
            latency_ms=(time.perf_counter() - start) * 1000,
            message=str(e),
        )
    return ComponentHealth(
        name="tool_store",
        status="healthy",
        latency_ms=(time.perf_counter() - start) * 1000,
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(tool_store: ToolStoreDep) -> HealthResponse:
    """Check service health status."""
    components = [await _check_tool_store(tool_store)]

    overall_status: Literal["healthy", "degraded", "unhealthy"] = "healthy"
    if any(c.status == "unhealthy" for c in components):
        overall_status = "unhealthy"

    logger.debug("health_check_completed", status=overall_status)

    return HealthResponse(
        status=overall_status,
        version=__version__,
        components=components,
    )


@metrics_router.get("/metrics")
async def get_metrics() -> Response:
    """Get Prometheus metrics in text format for scraping."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
