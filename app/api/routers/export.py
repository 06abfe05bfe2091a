"""Portfolio export router producing CSV attachments."""

from __future__ import annotations

import csv
import io
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from fastapi.responses import Response

from app.analytics import (
    MarketplaceAnalyticsService,
    PortfolioReport,
    analytics_format_currency,
    analytics_format_decimal,
    analytics_format_large_number,
    analytics_format_percentage,
)
from app.analytics.grouping import analytics_resolve_sector_label
from app.domain import UserRole

from ..session import api_error_response, api_require_role, api_resolve_caller_session

logger = logging.getLogger(__name__)

EXPORT_TITLE = "NAIJACONNECT CAPITAL - PORTFOLIO EXPORT"


def api_create_export_router(analytics_service: MarketplaceAnalyticsService) -> APIRouter:
    """Create export router exposing the investor portfolio CSV.

    Args:
        analytics_service: Analytics report service.

    Returns:
        APIRouter: Router exposing `/export/portfolio.csv`.

    Raises:
        ValueError: Raised when analytics_service is invalid.
    """

    if analytics_service is None:
        raise ValueError("analytics_service must not be None")

    router = APIRouter(prefix="/export", tags=["export"])

    @router.get("/portfolio.csv")
    def api_export_portfolio_csv(request: Request) -> Response:
        """Return the caller's holdings and portfolio summary as CSV.

        Returns:
            Response: `text/csv` attachment or JSON error payload.
        """

        session = api_resolve_caller_session(request)
        denied_response = api_require_role(session, UserRole.INVESTOR)
        if denied_response is not None:
            return denied_response

        generated_at_utc = datetime.now(timezone.utc)
        try:
            report = analytics_service.analytics_portfolio_report(investor_id=session.user_id, include_returns=True)
        except RuntimeError:
            logger.exception("portfolio export read failed", extra={"user_id": session.user_id})
            return api_error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "EXPORT_FAILED",
                "Failed to generate CSV export",
            )

        filename = f"portfolio-export-{generated_at_utc.date().isoformat()}.csv"
        return Response(
            content=api_render_portfolio_csv(report, session.user_id, generated_at_utc),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
            status_code=status.HTTP_200_OK,
        )

    return router


def api_render_portfolio_csv(report: PortfolioReport, user_id: str, generated_at_utc: datetime) -> str:
    """Render holdings and summary sections of a portfolio export.

    Args:
        report: Portfolio report for the caller.
        user_id: Caller user identifier printed in the header.
        generated_at_utc: Export generation time.

    Returns:
        str: CSV document text.
    """

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([EXPORT_TITLE])
    writer.writerow([f"Generated on: {generated_at_utc.isoformat()}"])
    writer.writerow([f"User: {user_id}"])
    writer.writerow([])

    writer.writerow(["PORTFOLIO HOLDINGS"])
    writer.writerow(["Business Name", "Sector", "Investment Amount", "Investment Date", "Status"])
    for investment in report.investments:
        writer.writerow(
            [
                investment.business_title,
                analytics_resolve_sector_label(investment.business_sector),
                analytics_format_decimal(investment.amount),
                investment.investment_date_utc.date().isoformat(),
                investment.status,
            ]
        )
    writer.writerow([])

    metrics = report.metrics
    writer.writerow(["PORTFOLIO SUMMARY"])
    writer.writerow(["Metric", "Value", "Display"])
    for label, amount in (
        ("Total Invested", metrics.total_invested),
        ("Total Current Value", metrics.total_current_value),
        ("Total Returns", metrics.total_returns),
    ):
        writer.writerow([label, analytics_format_decimal(amount), analytics_format_currency(amount)])
    writer.writerow(
        [
            "Return Percentage",
            analytics_format_decimal(metrics.return_percentage),
            analytics_format_percentage(metrics.return_percentage),
        ]
    )
    writer.writerow(
        [
            "Portfolio Size",
            analytics_format_decimal(metrics.total_invested),
            analytics_format_large_number(metrics.total_invested),
        ]
    )
    writer.writerow(["Active Investments", str(report.active_investments), str(report.active_investments)])
    writer.writerow(["Total Investments", str(report.total_investments), str(report.total_investments)])
    return buffer.getvalue()


__all__ = ["api_create_export_router", "api_render_portfolio_csv"]
