"""Typed output contracts for analytics-layer aggregations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from app.domain import BusinessRecord, InvestmentRecord, UserRecord


@dataclass(frozen=True)
class PortfolioMetrics:
    """Aggregated investor portfolio performance.

    Attributes:
        total_invested: Sum of investment amounts.
        total_current_value: Sum of current values, estimated where absent.
        total_returns: Sum of all distributions received.
        return_percentage: (current value - invested) / invested x 100.
        net_gain: Current value - invested + distributions.
        roi: Net gain / invested x 100.
        average_roi: Mean of per-investment ROI percentages.
        best_investment_id: Investment with the highest ROI.
        worst_investment_id: Investment with the lowest ROI.
        portfolio_growth: (current value + distributions) / invested - 1, in percent.
        monthly_growth_rate: Compound monthly growth rate in percent.
        yearly_growth_rate: Compound yearly growth rate in percent.
        investment_count: Number of investments.
        active_investment_count: Number of investments in ACTIVE status.
    """

    total_invested: Decimal
    total_current_value: Decimal
    total_returns: Decimal
    return_percentage: Decimal
    net_gain: Decimal
    roi: Decimal
    average_roi: Decimal
    best_investment_id: str | None
    worst_investment_id: str | None
    portfolio_growth: Decimal
    monthly_growth_rate: Decimal
    yearly_growth_rate: Decimal
    investment_count: int
    active_investment_count: int


@dataclass(frozen=True)
class SectorAnalysis:
    """Portfolio aggregate for one business sector.

    Attributes:
        sector: Sector label or the `Unspecified` sentinel.
        total_invested: Invested capital in this sector.
        total_current_value: Current value of this sector's investments.
        total_returns: Unrealized gain plus distributions for this sector.
        roi: Sector returns / invested x 100.
        investment_count: Number of investments in this sector.
        percentage: Share of total invested capital, in percent.
    """

    sector: str
    total_invested: Decimal
    total_current_value: Decimal
    total_returns: Decimal
    roi: Decimal
    investment_count: int
    percentage: Decimal


@dataclass(frozen=True)
class TimeSeriesPoint:
    """Cumulative portfolio state as of one calendar month end.

    Attributes:
        month: `YYYY-MM` month key.
        total_invested: Cumulative invested amount.
        total_current_value: Cumulative current value.
        total_returns: Cumulative distributions, zero unless requested.
        roi: (current value + distributions - invested) / invested x 100.
        new_investment_count: Investments created within this month.
    """

    month: str
    total_invested: Decimal
    total_current_value: Decimal
    total_returns: Decimal
    roi: Decimal
    new_investment_count: int


@dataclass(frozen=True)
class PortfolioReport:
    """Investor dashboard payload.

    Attributes:
        metrics: Portfolio totals and ratios.
        sector_analysis: Per-sector breakdown.
        time_series: Trailing monthly buckets.
        investments: Source investments, newest first.
        total_investments: Number of investments.
        active_investments: Number of ACTIVE investments.
    """

    metrics: PortfolioMetrics
    sector_analysis: list[SectorAnalysis]
    time_series: list[TimeSeriesPoint]
    investments: list[InvestmentRecord]
    total_investments: int
    active_investments: int


@dataclass(frozen=True)
class OpportunityMetrics:
    """Capital-raise metrics for one business opportunity."""

    business_id: str
    title: str
    status: str
    created_at_utc: datetime
    target_capital: Decimal
    current_raised: Decimal
    capital_raised: Decimal
    funding_progress: Decimal
    investor_count: int
    investment_count: int
    status_distribution: dict[str, int]


@dataclass(frozen=True)
class MonthlyTrend:
    """Non-cumulative investment activity for one calendar month."""

    month: str
    new_investments: int
    total_amount: Decimal
    new_investors: int


@dataclass(frozen=True)
class FundingMilestone:
    """Checkpoint in the cumulative capital-raise history.

    Attributes:
        date_utc: Creation time of the investment that reached the milestone.
        amount: Amount of that investment.
        cumulative_amount: Capital raised up to and including it.
        investor_count: Distinct investors up to and including it.
        milestone: Display label.
    """

    date_utc: datetime
    amount: Decimal
    cumulative_amount: Decimal
    investor_count: int
    milestone: str


@dataclass(frozen=True)
class BusinessSummary:
    """Aggregate capital-raise summary across one owner's opportunities."""

    total_opportunities: int
    total_capital_raised: Decimal
    total_target_capital: Decimal
    total_investors: int
    active_opportunities: int
    pending_investments: int
    average_investment_size: Decimal
    capital_utilization_rate: Decimal


@dataclass(frozen=True)
class BusinessMetrics:
    """Business-owner dashboard payload."""

    opportunities: list[OpportunityMetrics]
    summary: BusinessSummary
    monthly_trends: list[MonthlyTrend]
    funding_milestones: list[FundingMilestone]
    recent_investments: list[InvestmentRecord]


@dataclass(frozen=True)
class PlatformOverview:
    """Platform-wide totals."""

    total_users: int
    total_businesses: int
    total_investments: int
    total_volume: Decimal
    average_investment_size: Decimal
    investment_success_rate: Decimal
    platform_growth_rate: Decimal


@dataclass(frozen=True)
class PlatformDistributions:
    """Independent category counts over platform records."""

    users_by_role: dict[str, int]
    businesses_by_industry: dict[str, int]
    investments_by_status: dict[str, int]


@dataclass(frozen=True)
class GrowthWindow:
    """New-record counts since one window start.

    Attributes:
        since_utc: Inclusive window start.
        new_users: Users created on or after the window start.
        new_businesses: Businesses created on or after the window start.
        new_investments: Investments created on or after the window start.
    """

    since_utc: datetime
    new_users: int
    new_businesses: int
    new_investments: int


@dataclass(frozen=True)
class PlatformGrowth:
    """Monthly and yearly growth windows."""

    monthly: GrowthWindow
    yearly: GrowthWindow


@dataclass(frozen=True)
class RecentActivity:
    """Most recently created records per entity type, newest first."""

    users: list[UserRecord]
    businesses: list[BusinessRecord]
    investments: list[InvestmentRecord]


@dataclass(frozen=True)
class PlatformMonthlyTrend:
    """Platform activity within one calendar month."""

    month: str
    new_users: int
    new_businesses: int
    new_investments: int
    investment_volume: Decimal


@dataclass(frozen=True)
class PlatformMetrics:
    """Administrator dashboard payload."""

    overview: PlatformOverview
    distributions: PlatformDistributions
    growth: PlatformGrowth
    recent_activity: RecentActivity
    monthly_trends: list[PlatformMonthlyTrend]


@dataclass(frozen=True)
class DashboardReport:
    """Role-selected dashboard payload.

    Attributes:
        kind: `portfolio`, `business`, or `platform`.
        report: Report matching the kind.
    """

    kind: str
    report: PortfolioReport | BusinessMetrics | PlatformMetrics


__all__ = [
    "BusinessMetrics",
    "BusinessSummary",
    "DashboardReport",
    "FundingMilestone",
    "GrowthWindow",
    "MonthlyTrend",
    "OpportunityMetrics",
    "PlatformDistributions",
    "PlatformGrowth",
    "PlatformMetrics",
    "PlatformMonthlyTrend",
    "PlatformOverview",
    "PortfolioMetrics",
    "PortfolioReport",
    "RecentActivity",
    "SectorAnalysis",
    "TimeSeriesPoint",
]
