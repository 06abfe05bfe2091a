"""Administrator platform-wide aggregations."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import TypeVar

from app.domain import BusinessRecord, InvestmentRecord, InvestmentStatus, UserRecord

from .grouping import ZERO, analytics_count_by, analytics_percentage, analytics_sum_amounts
from .interfaces import (
    GrowthWindow,
    PlatformDistributions,
    PlatformGrowth,
    PlatformMetrics,
    PlatformMonthlyTrend,
    PlatformOverview,
    RecentActivity,
)
from .months import (
    analytics_month_key,
    analytics_month_start,
    analytics_month_start_utc,
    analytics_normalize_utc,
    analytics_resolve_reference_time,
    analytics_shift_month,
    analytics_trailing_month_starts,
)

_RecordT = TypeVar("_RecordT")


def _analytics_user_created_at(user: UserRecord) -> datetime:
    return analytics_normalize_utc(user.created_at_utc)


def _analytics_business_created_at(business: BusinessRecord) -> datetime:
    return analytics_normalize_utc(business.created_at_utc)


def _analytics_investment_created_at(investment: InvestmentRecord) -> datetime:
    return analytics_normalize_utc(investment.investment_date_utc)


def analytics_growth_window_starts(reference_at_utc: datetime) -> tuple[datetime, datetime]:
    """Resolve the monthly and yearly growth window starts.

    Args:
        reference_at_utc: Offset-aware reference time.

    Returns:
        tuple[datetime, datetime]: First day of the previous calendar month,
        and first day of the same month one year earlier.
    """

    reference_month = analytics_month_start(reference_at_utc)
    return (
        analytics_month_start_utc(analytics_shift_month(reference_month, -1)),
        analytics_month_start_utc(analytics_shift_month(reference_month, -12)),
    )


def _analytics_count_since(
    records: Sequence[_RecordT],
    created_at: Callable[[_RecordT], datetime],
    since_utc: datetime,
) -> int:
    return sum(1 for record in records if created_at(record) >= since_utc)


def _analytics_build_growth_window(
    users: Sequence[UserRecord],
    businesses: Sequence[BusinessRecord],
    investments: Sequence[InvestmentRecord],
    since_utc: datetime,
) -> GrowthWindow:
    return GrowthWindow(
        since_utc=since_utc,
        new_users=_analytics_count_since(users, _analytics_user_created_at, since_utc),
        new_businesses=_analytics_count_since(businesses, _analytics_business_created_at, since_utc),
        new_investments=_analytics_count_since(investments, _analytics_investment_created_at, since_utc),
    )


def analytics_most_recent(
    records: Sequence[_RecordT],
    created_at: Callable[[_RecordT], datetime],
    limit: int,
) -> list[_RecordT]:
    """Return up to `limit` records sorted newest first."""

    return sorted(records, key=created_at, reverse=True)[:limit]


def analytics_calculate_platform_trends(
    users: Sequence[UserRecord],
    businesses: Sequence[BusinessRecord],
    investments: Sequence[InvestmentRecord],
    reference_at_utc: datetime,
    months: int = 12,
) -> list[PlatformMonthlyTrend]:
    """Bucket platform activity into the trailing calendar months.

    Args:
        users: Platform users.
        businesses: Platform businesses.
        investments: Platform investments.
        reference_at_utc: Time whose month closes the window.
        months: Number of trailing months.

    Returns:
        list[PlatformMonthlyTrend]: Exactly `months` ascending buckets,
        zero-activity months included. Records outside the window are ignored.

    Raises:
        ValueError: Raised when months is lower than 1.
    """

    month_starts = analytics_trailing_month_starts(reference_at_utc, months)
    new_users = dict.fromkeys(month_starts, 0)
    new_businesses = dict.fromkeys(month_starts, 0)
    new_investments = dict.fromkeys(month_starts, 0)
    investment_volume: dict[date, Decimal] = dict.fromkeys(month_starts, ZERO)

    for user in users:
        month_start = analytics_month_start(user.created_at_utc)
        if month_start in new_users:
            new_users[month_start] += 1
    for business in businesses:
        month_start = analytics_month_start(business.created_at_utc)
        if month_start in new_businesses:
            new_businesses[month_start] += 1
    for investment in investments:
        month_start = analytics_month_start(investment.investment_date_utc)
        if month_start in new_investments:
            new_investments[month_start] += 1
            investment_volume[month_start] += investment.amount

    return [
        PlatformMonthlyTrend(
            month=analytics_month_key(month_start),
            new_users=new_users[month_start],
            new_businesses=new_businesses[month_start],
            new_investments=new_investments[month_start],
            investment_volume=investment_volume[month_start],
        )
        for month_start in month_starts
    ]


def analytics_calculate_platform_metrics(
    users: Sequence[UserRecord],
    businesses: Sequence[BusinessRecord],
    investments: Sequence[InvestmentRecord],
    reference_at_utc: datetime | None = None,
    recent_limit: int = 10,
    trend_months: int = 12,
) -> PlatformMetrics:
    """Aggregate platform-wide counts, distributions, growth and activity.

    Args:
        users: All platform users.
        businesses: All platform businesses.
        investments: All platform investments regardless of status.
        reference_at_utc: Time anchoring growth windows; defaults to now.
        recent_limit: Number of recent records per entity type.
        trend_months: Number of trailing months in the activity trend.

    Returns:
        PlatformMetrics: Administrator dashboard payload. Total volume counts
        every investment, pending ones included.

    Raises:
        ValueError: Raised when recent_limit is negative or trend_months is
        lower than 1.
    """

    if recent_limit < 0:
        raise ValueError("recent_limit must be greater than or equal to 0")

    resolved_reference_at = analytics_resolve_reference_time(reference_at_utc)
    monthly_since, yearly_since = analytics_growth_window_starts(resolved_reference_at)
    monthly_window = _analytics_build_growth_window(users, businesses, investments, monthly_since)
    yearly_window = _analytics_build_growth_window(users, businesses, investments, yearly_since)

    total_volume = analytics_sum_amounts(investment.amount for investment in investments)
    average_investment_size = ZERO
    if investments:
        average_investment_size = total_volume / len(investments)
    total_investments = Decimal(len(investments))
    active_investments = Decimal(
        sum(1 for investment in investments if investment.status == InvestmentStatus.ACTIVE.value)
    )

    overview = PlatformOverview(
        total_users=len(users),
        total_businesses=len(businesses),
        total_investments=len(investments),
        total_volume=total_volume,
        average_investment_size=average_investment_size,
        investment_success_rate=analytics_percentage(active_investments, total_investments),
        platform_growth_rate=analytics_percentage(Decimal(monthly_window.new_investments), total_investments),
    )
    distributions = PlatformDistributions(
        users_by_role=analytics_count_by(users, lambda user: user.role),
        businesses_by_industry=analytics_count_by(businesses, lambda business: business.industry),
        investments_by_status=analytics_count_by(investments, lambda investment: investment.status),
    )
    recent_activity = RecentActivity(
        users=analytics_most_recent(users, _analytics_user_created_at, recent_limit),
        businesses=analytics_most_recent(businesses, _analytics_business_created_at, recent_limit),
        investments=analytics_most_recent(investments, _analytics_investment_created_at, recent_limit),
    )

    return PlatformMetrics(
        overview=overview,
        distributions=distributions,
        growth=PlatformGrowth(monthly=monthly_window, yearly=yearly_window),
        recent_activity=recent_activity,
        monthly_trends=analytics_calculate_platform_trends(
            users,
            businesses,
            investments,
            reference_at_utc=resolved_reference_at,
            months=trend_months,
        ),
    )


__all__ = [
    "analytics_calculate_platform_metrics",
    "analytics_calculate_platform_trends",
    "analytics_growth_window_starts",
    "analytics_most_recent",
]
