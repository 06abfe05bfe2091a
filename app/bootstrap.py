"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from app.analytics import MarketplaceAnalyticsService
from app.api import create_api_application
from app.config import AppSettings, config_load_settings
from app.db import SQLAlchemyDatabaseHealthService, SQLAlchemyMarketplaceReadService, db_create_engine


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings; loaded from environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    engine = db_create_engine(database_url=resolved_settings.database_url)
    db_health_service = SQLAlchemyDatabaseHealthService(engine=engine)
    marketplace_repository = SQLAlchemyMarketplaceReadService(engine=engine)
    analytics_service = MarketplaceAnalyticsService(
        repository=marketplace_repository,
        recent_limit=resolved_settings.analytics_recent_limit,
    )
    return create_api_application(
        settings=resolved_settings,
        db_health_service=db_health_service,
        analytics_service=analytics_service,
    )
