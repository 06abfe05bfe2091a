"""Business-owner capital-raise aggregations."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from app.domain import BusinessRecord, BusinessStatus, InvestmentRecord, InvestmentStatus

from .grouping import ZERO, analytics_count_by, analytics_percentage, analytics_sum_amounts
from .interfaces import BusinessMetrics, BusinessSummary, FundingMilestone, MonthlyTrend, OpportunityMetrics
from .months import analytics_month_key, analytics_month_start, analytics_normalize_utc

MILESTONE_INVESTMENT_INTERVAL = 5
MILESTONE_AMOUNT_STEP = Decimal("1000000")


def _analytics_distinct_investor_ids(investments: Sequence[InvestmentRecord]) -> set[str]:
    """Collect known investor identifiers, ignoring anonymous rows."""

    return {investment.investor_id for investment in investments if investment.investor_id is not None}


def analytics_calculate_opportunity_metrics(business: BusinessRecord) -> OpportunityMetrics:
    """Compute capital-raise metrics for one opportunity.

    Args:
        business: Opportunity with nested investments.

    Returns:
        OpportunityMetrics: Raised capital, funding progress, investor and
        status counts. Progress is current_raised / target_capital, zero for a
        zero target, and may exceed 1.
    """

    funding_progress = ZERO
    if business.target_capital != ZERO:
        funding_progress = business.current_raised / business.target_capital

    return OpportunityMetrics(
        business_id=business.business_id,
        title=business.title,
        status=business.status,
        created_at_utc=business.created_at_utc,
        target_capital=business.target_capital,
        current_raised=business.current_raised,
        capital_raised=analytics_sum_amounts(investment.amount for investment in business.investments),
        funding_progress=funding_progress,
        investor_count=len(_analytics_distinct_investor_ids(business.investments)),
        investment_count=len(business.investments),
        status_distribution=analytics_count_by(business.investments, lambda investment: investment.status),
    )


@dataclass
class _MonthAccumulator:
    """Mutable per-month running totals."""

    new_investments: int = 0
    total_amount: Decimal = ZERO
    investor_ids: set[str] = field(default_factory=set)


def analytics_calculate_monthly_trends(investments: Sequence[InvestmentRecord]) -> list[MonthlyTrend]:
    """Bucket investments by calendar month of creation.

    Args:
        investments: Investments across one owner's opportunities.

    Returns:
        list[MonthlyTrend]: Per-month counts, amounts and distinct investors,
        ascending by month. Values are not cumulative.
    """

    accumulators: dict[date, _MonthAccumulator] = {}
    for investment in investments:
        accumulator = accumulators.setdefault(
            analytics_month_start(investment.investment_date_utc),
            _MonthAccumulator(),
        )
        accumulator.new_investments += 1
        accumulator.total_amount += investment.amount
        if investment.investor_id is not None:
            accumulator.investor_ids.add(investment.investor_id)

    return [
        MonthlyTrend(
            month=analytics_month_key(month_start),
            new_investments=accumulator.new_investments,
            total_amount=accumulator.total_amount,
            new_investors=len(accumulator.investor_ids),
        )
        for month_start, accumulator in sorted(accumulators.items())
    ]


def analytics_build_funding_milestones(investments: Sequence[InvestmentRecord]) -> list[FundingMilestone]:
    """Mark funding checkpoints along the chronological capital-raise path.

    A milestone is recorded at every fifth investment (starting with the
    first) and whenever cumulative capital reaches the next million.

    Args:
        investments: Investments across one owner's opportunities.

    Returns:
        list[FundingMilestone]: Milestones in chronological order.
    """

    ordered_investments = sorted(
        investments,
        key=lambda investment: analytics_normalize_utc(investment.investment_date_utc),
    )

    milestones: list[FundingMilestone] = []
    cumulative_amount = ZERO
    cumulative_investor_ids: set[str] = set()
    for index, investment in enumerate(ordered_investments):
        cumulative_amount += investment.amount
        if investment.investor_id is not None:
            cumulative_investor_ids.add(investment.investor_id)

        reached_amount_step = cumulative_amount >= MILESTONE_AMOUNT_STEP * (len(milestones) + 1)
        if index % MILESTONE_INVESTMENT_INTERVAL == 0 or reached_amount_step:
            milestones.append(
                FundingMilestone(
                    date_utc=investment.investment_date_utc,
                    amount=investment.amount,
                    cumulative_amount=cumulative_amount,
                    investor_count=len(cumulative_investor_ids),
                    milestone=f"Milestone {len(milestones) + 1}",
                )
            )
    return milestones


def analytics_calculate_business_metrics(
    businesses: Sequence[BusinessRecord],
    recent_limit: int = 10,
) -> BusinessMetrics:
    """Aggregate capital-raise metrics across one owner's opportunities.

    Args:
        businesses: Owner's opportunities with nested investments.
        recent_limit: Number of most recent investments to include.

    Returns:
        BusinessMetrics: Per-opportunity metrics, owner summary, monthly
        trends, funding milestones and recent investments.

    Raises:
        ValueError: Raised when recent_limit is negative.
    """

    if recent_limit < 0:
        raise ValueError("recent_limit must be greater than or equal to 0")

    all_investments = [investment for business in businesses for investment in business.investments]
    total_capital_raised = analytics_sum_amounts(investment.amount for investment in all_investments)
    total_target_capital = analytics_sum_amounts(business.target_capital for business in businesses)

    average_investment_size = ZERO
    if all_investments:
        average_investment_size = total_capital_raised / len(all_investments)

    summary = BusinessSummary(
        total_opportunities=len(businesses),
        total_capital_raised=total_capital_raised,
        total_target_capital=total_target_capital,
        total_investors=len(_analytics_distinct_investor_ids(all_investments)),
        active_opportunities=sum(1 for business in businesses if business.status == BusinessStatus.OPEN.value),
        pending_investments=sum(
            1 for investment in all_investments if investment.status == InvestmentStatus.PENDING.value
        ),
        average_investment_size=average_investment_size,
        capital_utilization_rate=analytics_percentage(total_capital_raised, total_target_capital),
    )

    recent_investments = sorted(
        all_investments,
        key=lambda investment: analytics_normalize_utc(investment.investment_date_utc),
        reverse=True,
    )[:recent_limit]

    return BusinessMetrics(
        opportunities=[analytics_calculate_opportunity_metrics(business) for business in businesses],
        summary=summary,
        monthly_trends=analytics_calculate_monthly_trends(all_investments),
        funding_milestones=analytics_build_funding_milestones(all_investments),
        recent_investments=recent_investments,
    )


__all__ = [
    "analytics_build_funding_milestones",
    "analytics_calculate_business_metrics",
    "analytics_calculate_monthly_trends",
    "analytics_calculate_opportunity_metrics",
]
