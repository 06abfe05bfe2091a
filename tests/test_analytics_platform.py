"""Tests for administrator platform-wide aggregations.

These tests validate distributions, growth windows, recent activity ordering
and trailing monthly trends against a fixed reference time.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.analytics import analytics_calculate_platform_metrics
from app.analytics.platform import analytics_calculate_platform_trends, analytics_growth_window_starts
from app.domain import BusinessRecord, InvestmentRecord, UserRecord

_REFERENCE_AT = datetime(2026, 3, 10, 9, 30, tzinfo=timezone.utc)


def _build_user(user_id: str, role: str, created_at: datetime) -> UserRecord:
    return UserRecord(user_id=user_id, role=role, created_at_utc=created_at)


def _build_business(business_id: str, industry: str | None, created_at: datetime) -> BusinessRecord:
    return BusinessRecord(
        business_id=business_id,
        title=f"Title {business_id}",
        industry=industry,
        target_capital=Decimal("100000"),
        current_raised=Decimal("0"),
        status="OPEN",
        created_at_utc=created_at,
        owner_id="owner-1",
    )


def _build_investment(investment_id: str, amount: str, status: str, created_at: datetime) -> InvestmentRecord:
    return InvestmentRecord(
        investment_id=investment_id,
        amount=Decimal(amount),
        status=status,
        investment_date_utc=created_at,
        business_id="biz-1",
        business_title="Title biz-1",
        business_sector=None,
        investor_id="investor-1",
    )


def _build_platform_rows() -> tuple[list[UserRecord], list[BusinessRecord], list[InvestmentRecord]]:
    """Create a small platform snapshot spanning two years.

    Returns:
        tuple[list[UserRecord], list[BusinessRecord], list[InvestmentRecord]]:
        Users, businesses and investments.

    Raises:
        decimal.InvalidOperation: Raised when amount text is not numeric.
    """

    users = [
        _build_user("user-1", "INVESTOR", datetime(2024, 11, 2, tzinfo=timezone.utc)),
        _build_user("user-2", "INVESTOR", datetime(2025, 6, 1, tzinfo=timezone.utc)),
        _build_user("user-3", "BUSINESS_OWNER", datetime(2026, 2, 14, tzinfo=timezone.utc)),
        _build_user("user-4", "ADMINISTRATOR", datetime(2026, 3, 1, tzinfo=timezone.utc)),
    ]
    businesses = [
        _build_business("biz-1", "Agriculture", datetime(2025, 1, 20, tzinfo=timezone.utc)),
        _build_business("biz-2", None, datetime(2026, 2, 28, tzinfo=timezone.utc)),
    ]
    investments = [
        _build_investment("inv-1", "1000", "ACTIVE", datetime(2025, 2, 1, tzinfo=timezone.utc)),
        _build_investment("inv-2", "2000", "PENDING", datetime(2026, 1, 31, tzinfo=timezone.utc)),
        _build_investment("inv-3", "3000", "ACTIVE", datetime(2026, 2, 1, tzinfo=timezone.utc)),
        _build_investment("inv-4", "4000", "REJECTED", datetime(2026, 3, 9, tzinfo=timezone.utc)),
    ]
    return users, businesses, investments


def test_analytics_platform_overview_counts_every_investment_in_volume() -> None:
    """Include pending and rejected investments in total volume.

    Returns:
        None: Assertions validate overview values.

    Raises:
        AssertionError: Raised when overview totals differ.
    """

    users, businesses, investments = _build_platform_rows()

    overview = analytics_calculate_platform_metrics(
        users,
        businesses,
        investments,
        reference_at_utc=_REFERENCE_AT,
    ).overview

    assert overview.total_users == 4
    assert overview.total_businesses == 2
    assert overview.total_investments == 4
    assert overview.total_volume == Decimal("10000")
    assert overview.average_investment_size == Decimal("2500")
    assert overview.investment_success_rate == Decimal("50")
    # inv-3 and inv-4 fall inside the window opening on 2026-02-01.
    assert overview.platform_growth_rate == Decimal("50")


def test_analytics_platform_distributions_sum_to_totals() -> None:
    """Make every distribution sum to the corresponding total count.

    Returns:
        None: Assertions validate distribution partitions.

    Raises:
        AssertionError: Raised when a distribution loses records.
    """

    users, businesses, investments = _build_platform_rows()

    distributions = analytics_calculate_platform_metrics(
        users,
        businesses,
        investments,
        reference_at_utc=_REFERENCE_AT,
    ).distributions

    assert distributions.users_by_role == {"INVESTOR": 2, "BUSINESS_OWNER": 1, "ADMINISTRATOR": 1}
    assert distributions.businesses_by_industry == {"Agriculture": 1, "Unspecified": 1}
    assert sum(distributions.investments_by_status.values()) == len(investments)


def test_analytics_platform_growth_windows_start_on_calendar_months() -> None:
    """Anchor growth windows on the previous month and the same month last year.

    Returns:
        None: Assertions validate window boundaries and counts.

    Raises:
        AssertionError: Raised when window boundaries drift.
    """

    users, businesses, investments = _build_platform_rows()

    monthly_since, yearly_since = analytics_growth_window_starts(_REFERENCE_AT)
    growth = analytics_calculate_platform_metrics(
        users,
        businesses,
        investments,
        reference_at_utc=_REFERENCE_AT,
    ).growth

    assert monthly_since == datetime(2026, 2, 1, tzinfo=timezone.utc)
    assert yearly_since == datetime(2025, 3, 1, tzinfo=timezone.utc)
    assert (growth.monthly.new_users, growth.monthly.new_businesses, growth.monthly.new_investments) == (2, 1, 2)
    assert (growth.yearly.new_users, growth.yearly.new_businesses, growth.yearly.new_investments) == (3, 1, 3)


def test_analytics_platform_recent_activity_is_newest_first_and_capped() -> None:
    """Return at most the recent limit per entity, newest first.

    Returns:
        None: Assertions validate ordering and cap.

    Raises:
        AssertionError: Raised when ordering or cap is wrong.
    """

    start = datetime(2025, 1, 1, tzinfo=timezone.utc)
    investments = [
        _build_investment(f"inv-{index:02d}", "10", "ACTIVE", start + timedelta(days=index)) for index in range(12)
    ]

    recent = analytics_calculate_platform_metrics(
        [],
        [],
        investments,
        reference_at_utc=_REFERENCE_AT,
    ).recent_activity

    assert len(recent.investments) == 10
    assert recent.investments[0].investment_id == "inv-11"
    assert recent.investments[-1].investment_id == "inv-02"
    assert recent.users == []


def test_analytics_platform_trends_bucket_trailing_months() -> None:
    """Bucket activity into trailing months and ignore older records.

    Returns:
        None: Assertions validate trend buckets.

    Raises:
        AssertionError: Raised when buckets are wrong.
    """

    users, businesses, investments = _build_platform_rows()

    trends = analytics_calculate_platform_trends(
        users,
        businesses,
        investments,
        reference_at_utc=_REFERENCE_AT,
        months=3,
    )

    assert [trend.month for trend in trends] == ["2026-01", "2026-02", "2026-03"]
    assert [trend.new_users for trend in trends] == [0, 1, 1]
    assert [trend.new_businesses for trend in trends] == [0, 1, 0]
    assert [trend.new_investments for trend in trends] == [1, 1, 1]
    assert [trend.investment_volume for trend in trends] == [Decimal("2000"), Decimal("3000"), Decimal("4000")]


def test_analytics_platform_empty_platform_has_zero_rates() -> None:
    """Return zero ratios instead of dividing by zero on an empty platform."""

    metrics = analytics_calculate_platform_metrics([], [], [], reference_at_utc=_REFERENCE_AT)

    assert metrics.overview.investment_success_rate == Decimal("0")
    assert metrics.overview.platform_growth_rate == Decimal("0")
    assert metrics.overview.average_investment_size == Decimal("0")
    assert len(metrics.monthly_trends) == 12
    with pytest.raises(ValueError):
        analytics_calculate_platform_metrics([], [], [], reference_at_utc=_REFERENCE_AT, recent_limit=-1)
