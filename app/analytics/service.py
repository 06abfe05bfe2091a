"""Analytics report assembly over the marketplace read repository."""
# pylint: disable=too-few-public-methods

from __future__ import annotations

import logging
from datetime import datetime

from app.db import MarketplaceReadPort
from app.domain import CallerSession, InvestmentStatus, UserRole

from .business import analytics_calculate_business_metrics
from .interfaces import BusinessMetrics, DashboardReport, PlatformMetrics, PortfolioReport
from .platform import analytics_calculate_platform_metrics
from .portfolio import (
    analytics_analyze_by_sector,
    analytics_calculate_portfolio_metrics,
    analytics_generate_time_series,
)

logger = logging.getLogger(__name__)


class AnalyticsAccessError(PermissionError):
    """Raised when a caller role has no analytics dashboard."""


class MarketplaceAnalyticsService:
    """Fetch marketplace rows and compute role-scoped analytics reports."""

    def __init__(self, repository: MarketplaceReadPort, recent_limit: int = 10):
        """Initialize analytics service dependencies.

        Args:
            repository: DB-layer marketplace read repository.
            recent_limit: Number of recent records in activity lists.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when dependencies are invalid.
        """

        if repository is None:
            raise ValueError("repository must not be None")
        if recent_limit < 0:
            raise ValueError("recent_limit must be greater than or equal to 0")
        self._repository = repository
        self._recent_limit = recent_limit

    def analytics_portfolio_report(
        self,
        investor_id: str,
        months: int = 12,
        include_returns: bool = False,
        reference_at_utc: datetime | None = None,
    ) -> PortfolioReport:
        """Build the investor portfolio report.

        Args:
            investor_id: Investor user identifier.
            months: Time-series horizon in whole months.
            include_returns: Whether distributions are loaded and reported.
            reference_at_utc: Optional reference time for windows.

        Returns:
            PortfolioReport: Portfolio metrics, sectors and time series.

        Raises:
            ValueError: Raised when months is lower than 1.
            RuntimeError: Raised when repository read fails.
        """

        investments = self._repository.db_investment_list_for_investor(
            investor_id=investor_id,
            include_returns=include_returns,
        )
        logger.debug(
            "portfolio report assembled from %d investments",
            len(investments),
            extra={"user_id": investor_id, "report_kind": "portfolio"},
        )
        return PortfolioReport(
            metrics=analytics_calculate_portfolio_metrics(investments, reference_at_utc=reference_at_utc),
            sector_analysis=analytics_analyze_by_sector(investments),
            time_series=analytics_generate_time_series(
                investments,
                months=months,
                include_returns=include_returns,
                reference_at_utc=reference_at_utc,
            ),
            investments=investments,
            total_investments=len(investments),
            active_investments=sum(
                1 for investment in investments if investment.status == InvestmentStatus.ACTIVE.value
            ),
        )

    def analytics_business_report(self, owner_id: str) -> BusinessMetrics:
        """Build the business-owner capital-raise report.

        Raises:
            RuntimeError: Raised when repository read fails.
        """

        businesses = self._repository.db_business_list_for_owner(owner_id=owner_id)
        logger.debug(
            "business report assembled from %d opportunities",
            len(businesses),
            extra={"user_id": owner_id, "report_kind": "business"},
        )
        return analytics_calculate_business_metrics(businesses, recent_limit=self._recent_limit)

    def analytics_platform_report(self, reference_at_utc: datetime | None = None) -> PlatformMetrics:
        """Build the administrator platform report.

        Raises:
            RuntimeError: Raised when repository read fails.
        """

        users = self._repository.db_user_list()
        businesses = self._repository.db_business_list()
        investments = self._repository.db_investment_list()
        logger.debug(
            "platform report assembled from %d users, %d businesses, %d investments",
            len(users),
            len(businesses),
            len(investments),
            extra={"report_kind": "platform"},
        )
        return analytics_calculate_platform_metrics(
            users,
            businesses,
            investments,
            reference_at_utc=reference_at_utc,
            recent_limit=self._recent_limit,
        )

    def analytics_dashboard_report(
        self,
        session: CallerSession,
        months: int = 12,
        include_returns: bool = False,
        reference_at_utc: datetime | None = None,
    ) -> DashboardReport:
        """Select and build the dashboard report matching the caller role.

        Args:
            session: Authenticated caller.
            months: Portfolio time-series horizon for investors.
            include_returns: Whether investor distributions are reported.
            reference_at_utc: Optional reference time for windows.

        Returns:
            DashboardReport: `portfolio`, `business` or `platform` report.

        Raises:
            AnalyticsAccessError: Raised when the role is not a known platform role.
            RuntimeError: Raised when repository read fails.
        """

        role = analytics_resolve_role(session.role)
        if role is UserRole.INVESTOR:
            return DashboardReport(
                kind="portfolio",
                report=self.analytics_portfolio_report(
                    session.user_id,
                    months=months,
                    include_returns=include_returns,
                    reference_at_utc=reference_at_utc,
                ),
            )
        if role is UserRole.BUSINESS_OWNER:
            return DashboardReport(kind="business", report=self.analytics_business_report(session.user_id))
        return DashboardReport(kind="platform", report=self.analytics_platform_report(reference_at_utc))


def analytics_resolve_role(role_value: str) -> UserRole:
    """Parse a raw role value into a platform role.

    Raises:
        AnalyticsAccessError: Raised when the value is not a known role.
    """

    try:
        return UserRole(role_value.strip().upper())
    except (AttributeError, ValueError) as error:
        raise AnalyticsAccessError(f"unsupported role={role_value}") from error


__all__ = ["AnalyticsAccessError", "MarketplaceAnalyticsService", "analytics_resolve_role"]
