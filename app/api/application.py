"""FastAPI application factory for the marketplace analytics service."""

from fastapi import FastAPI

from app.analytics import MarketplaceAnalyticsService
from app.config import AppSettings
from app.db import DatabaseHealthPort

from .routers import api_create_analytics_router, api_create_export_router, api_create_health_router


def create_api_application(
    settings: AppSettings,
    db_health_service: DatabaseHealthPort,
    analytics_service: MarketplaceAnalyticsService,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        db_health_service: Database health service used by health endpoints.
        analytics_service: Analytics report service used by analytics and export endpoints.

    Returns:
        FastAPI: Framework application instance with all routers mounted.

    Raises:
        ValueError: Raised when router dependencies are invalid.
    """
    application = FastAPI(title="NaijaConnect Capital Analytics")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return service identification for deployment checks."""

        return {
            "service": "naijaconnect-analytics",
            "status": "ready",
            "environment": settings.environment_name,
        }

    application.include_router(
        api_create_health_router(db_health_service=db_health_service, environment_name=settings.environment_name)
    )
    application.include_router(api_create_analytics_router(settings=settings, analytics_service=analytics_service))
    application.include_router(api_create_export_router(analytics_service=analytics_service))

    return application
