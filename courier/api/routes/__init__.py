"""API route registration."""

from fastapi import APIRouter, FastAPI

from courier.observability.logging import get_logger

logger = get_logger(__name__)


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all routes.

    Returns:
        APIRouter with all v1 routes registered
    """
    router = APIRouter(prefix="/v1")

    from courier.api.routes.messages import router as messages_router
    from courier.api.routes.tools import router as tools_router

    router.include_router(tools_router, tags=["Tools"])
    router.include_router(messages_router, tags=["Messages"])

    logger.debug("v1_router_created", routes=["tools", "messages"])

    return router


def register_routes(app: FastAPI, metrics_enabled: bool = True) -> None:
    """Register all routes with the FastAPI application.

    Args:
        app: FastAPI application instance
        metrics_enabled: Expose Prometheus metrics at /metrics
    """
    app.include_router(create_v1_router())

    # Health and metrics live at the root
    from courier.api.routes.health import metrics_router
    from courier.api.routes.health import router as health_router

    app.include_router(health_router, tags=["Health"])
    if metrics_enabled:
        app.include_router(metrics_router, tags=["Health"])

    logger.info("routes_registered")
