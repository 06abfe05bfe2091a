"""Health endpoint router reporting service and marketplace database state."""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.db import DatabaseHealthPort

logger = logging.getLogger(__name__)


def _api_health_payload(overall: str, database: str, detail: str, target: str, environment_name: str) -> dict:
    return {
        "status": overall,
        "app": "up",
        "database": database,
        "detail": detail,
        "target": target,
        "environment": environment_name,
    }


def api_create_health_router(db_health_service: DatabaseHealthPort, environment_name: str = "development") -> APIRouter:
    """Create the `/health` router backed by a database connectivity probe.

    Args:
        db_health_service: DB-layer health service interface.
        environment_name: Runtime environment label echoed in responses.

    Returns:
        APIRouter: Router exposing `/health`.

    Raises:
        ValueError: Raised when db_health_service is invalid.
    """

    if db_health_service is None:
        raise ValueError("db_health_service must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Probe the marketplace database.

        Returns:
            JSONResponse: 200 when the database answers, 503 with a degraded
            payload otherwise.
        """

        target = db_health_service.db_connection_label()
        try:
            db_health = db_health_service.db_check_health()
        except ConnectionError as error:
            logger.warning("marketplace database unreachable: %s", error, extra={"error_code": "DATABASE_DOWN"})
            return JSONResponse(
                content=_api_health_payload("degraded", "down", str(error), target, environment_name),
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        return JSONResponse(
            content=_api_health_payload("ok", db_health.status, db_health.detail, target, environment_name),
            status_code=status.HTTP_200_OK,
        )

    return router
