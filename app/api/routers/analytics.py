"""Analytics API router composition for role-scoped dashboard reports."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import JSONResponse

from app.analytics import AnalyticsAccessError, MarketplaceAnalyticsService
from app.config import AppSettings
from app.domain import UserRole

from ..serializers import (
    api_serialize_business_metrics,
    api_serialize_dashboard_report,
    api_serialize_platform_metrics,
    api_serialize_portfolio_report,
)
from ..session import api_error_response, api_require_role, api_resolve_caller_session

logger = logging.getLogger(__name__)


def api_create_analytics_router(
    settings: AppSettings,
    analytics_service: MarketplaceAnalyticsService,
) -> APIRouter:
    """Create analytics router exposing portfolio, business and platform reports.

    Args:
        settings: Runtime settings used for time-range bounds.
        analytics_service: Analytics report service.

    Returns:
        APIRouter: Router exposing `/analytics/*` endpoints.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if analytics_service is None:
        raise ValueError("analytics_service must not be None")

    router = APIRouter(prefix="/analytics", tags=["analytics"])

    @router.get("/portfolio")
    def api_analytics_portfolio(
        request: Request,
        time_range: int = Query(default=settings.analytics_default_months, ge=1, le=settings.analytics_max_months),
        include_returns: bool = Query(default=False),
    ) -> JSONResponse:
        """Return the caller's investor portfolio report.

        Args:
            request: Incoming request carrying caller identity headers.
            time_range: Time-series horizon in months.
            include_returns: Whether distributions are included.

        Returns:
            JSONResponse: Portfolio report envelope or error payload.
        """

        session = api_resolve_caller_session(request)
        denied_response = api_require_role(session, UserRole.INVESTOR)
        if denied_response is not None:
            return denied_response

        try:
            report = analytics_service.analytics_portfolio_report(
                investor_id=session.user_id,
                months=time_range,
                include_returns=include_returns,
            )
        except RuntimeError:
            logger.exception("portfolio analytics read failed", extra={"user_id": session.user_id})
            return api_error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "ANALYTICS_READ_FAILED",
                "Failed to fetch portfolio analytics",
            )

        payload = {"status": "success", "data": api_serialize_portfolio_report(report)}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/business")
    def api_analytics_business(request: Request) -> JSONResponse:
        """Return the caller's business-owner capital-raise report.

        Returns:
            JSONResponse: Business report envelope or error payload.
        """

        session = api_resolve_caller_session(request)
        denied_response = api_require_role(session, UserRole.BUSINESS_OWNER)
        if denied_response is not None:
            return denied_response

        try:
            metrics = analytics_service.analytics_business_report(owner_id=session.user_id)
        except RuntimeError:
            logger.exception("business analytics read failed", extra={"user_id": session.user_id})
            return api_error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "ANALYTICS_READ_FAILED",
                "Failed to fetch business analytics",
            )

        payload = {"status": "success", "data": api_serialize_business_metrics(metrics)}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/platform")
    def api_analytics_platform(request: Request) -> JSONResponse:
        """Return the platform-wide administrator report.

        Returns:
            JSONResponse: Platform report envelope or error payload.
        """

        session = api_resolve_caller_session(request)
        denied_response = api_require_role(session, UserRole.ADMINISTRATOR)
        if denied_response is not None:
            return denied_response

        try:
            metrics = analytics_service.analytics_platform_report()
        except RuntimeError:
            logger.exception("platform analytics read failed", extra={"user_id": session.user_id})
            return api_error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "ANALYTICS_READ_FAILED",
                "Failed to fetch platform analytics",
            )

        payload = {"status": "success", "data": api_serialize_platform_metrics(metrics)}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/dashboard")
    def api_analytics_dashboard(
        request: Request,
        time_range: int = Query(default=settings.analytics_default_months, ge=1, le=settings.analytics_max_months),
        include_returns: bool = Query(default=False),
    ) -> JSONResponse:
        """Return the dashboard report selected by the caller role.

        Returns:
            JSONResponse: Tagged dashboard envelope or error payload.
        """

        session = api_resolve_caller_session(request)
        if session is None:
            return api_error_response(
                status.HTTP_401_UNAUTHORIZED,
                "AUTHENTICATION_REQUIRED",
                "Authentication required",
            )

        try:
            dashboard = analytics_service.analytics_dashboard_report(
                session,
                months=time_range,
                include_returns=include_returns,
            )
        except AnalyticsAccessError as error:
            return api_error_response(status.HTTP_403_FORBIDDEN, "ACCESS_DENIED", str(error))
        except RuntimeError:
            logger.exception(
                "dashboard analytics read failed",
                extra={"user_id": session.user_id, "role": session.role},
            )
            return api_error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "ANALYTICS_READ_FAILED",
                "Failed to fetch dashboard analytics",
            )

        payload = {"status": "success", **api_serialize_dashboard_report(dashboard)}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router


__all__ = ["api_create_analytics_router"]
