"""Investor portfolio aggregations: totals, sector breakdown, and time series."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from app.domain import InvestmentRecord, InvestmentStatus, ReturnRecord

from .grouping import ZERO, analytics_percentage, analytics_resolve_sector_label, analytics_sum_amounts
from .interfaces import PortfolioMetrics, SectorAnalysis, TimeSeriesPoint
from .months import (
    analytics_month_key,
    analytics_month_start_utc,
    analytics_normalize_utc,
    analytics_resolve_reference_time,
    analytics_shift_month,
    analytics_trailing_month_starts,
)

# Estimated growth applied when no measured current value exists.
ESTIMATED_VALUE_MULTIPLIER = Decimal("1.15")
DEFAULT_RETURN_TYPE = "Investment Return"

_SECONDS_PER_GROWTH_MONTH = Decimal(30 * 24 * 60 * 60)
_SECTOR_SORT_FIELDS = {"total_invested", "investment_count", "roi", "sector"}


def analytics_resolve_current_value(investment: InvestmentRecord) -> Decimal:
    """Return measured current value or the `amount x 1.15` estimate."""

    if investment.current_value is None:
        return investment.amount * ESTIMATED_VALUE_MULTIPLIER
    return investment.current_value


def analytics_resolve_return_type(investment_return: ReturnRecord) -> str:
    """Return the distribution label, defaulting to `Investment Return`."""

    if investment_return.description is None or not investment_return.description.strip():
        return DEFAULT_RETURN_TYPE
    return investment_return.description.strip()


def analytics_investment_returns_total(investment: InvestmentRecord) -> Decimal:
    """Sum the distributions paid against one investment."""

    return analytics_sum_amounts(investment_return.amount for investment_return in investment.returns)


def analytics_calculate_investment_roi(investment: InvestmentRecord) -> Decimal:
    """Compute one investment's ROI percentage including distributions.

    Args:
        investment: Investment record.

    Returns:
        Decimal: (current value - amount + distributions) / amount x 100, or
        zero when the amount is zero.
    """

    current_gain = (
        analytics_resolve_current_value(investment)
        - investment.amount
        + analytics_investment_returns_total(investment)
    )
    return analytics_percentage(current_gain, investment.amount)


def analytics_calculate_portfolio_metrics(
    investments: Sequence[InvestmentRecord],
    reference_at_utc: datetime | None = None,
) -> PortfolioMetrics:
    """Aggregate investor portfolio totals and performance ratios.

    Args:
        investments: Investor's investments, optionally carrying returns.
        reference_at_utc: Time used for growth-rate horizons; defaults to now.

    Returns:
        PortfolioMetrics: Portfolio totals. Empty input yields zero values.
    """

    if not investments:
        return PortfolioMetrics(
            total_invested=ZERO,
            total_current_value=ZERO,
            total_returns=ZERO,
            return_percentage=ZERO,
            net_gain=ZERO,
            roi=ZERO,
            average_roi=ZERO,
            best_investment_id=None,
            worst_investment_id=None,
            portfolio_growth=ZERO,
            monthly_growth_rate=ZERO,
            yearly_growth_rate=ZERO,
            investment_count=0,
            active_investment_count=0,
        )

    total_invested = analytics_sum_amounts(investment.amount for investment in investments)
    total_current_value = analytics_sum_amounts(
        analytics_resolve_current_value(investment) for investment in investments
    )
    total_returns = analytics_sum_amounts(
        analytics_investment_returns_total(investment) for investment in investments
    )
    net_gain = total_current_value - total_invested + total_returns

    investment_rois = [(investment, analytics_calculate_investment_roi(investment)) for investment in investments]
    best_investment, best_roi = investment_rois[0]
    worst_investment, worst_roi = investment_rois[0]
    for investment, investment_roi in investment_rois[1:]:
        if investment_roi > best_roi:
            best_investment, best_roi = investment, investment_roi
        if investment_roi < worst_roi:
            worst_investment, worst_roi = investment, investment_roi
    average_roi = analytics_sum_amounts(roi for _, roi in investment_rois) / len(investment_rois)

    portfolio_growth = ZERO
    if total_invested > ZERO:
        portfolio_growth = ((total_current_value + total_returns) / total_invested - 1) * Decimal("100")

    monthly_growth_rate, yearly_growth_rate = _analytics_compound_growth_rates(
        investments=investments,
        portfolio_growth=portfolio_growth,
        reference_at_utc=analytics_resolve_reference_time(reference_at_utc),
    )

    return PortfolioMetrics(
        total_invested=total_invested,
        total_current_value=total_current_value,
        total_returns=total_returns,
        return_percentage=analytics_percentage(total_current_value - total_invested, total_invested),
        net_gain=net_gain,
        roi=analytics_percentage(net_gain, total_invested),
        average_roi=average_roi,
        best_investment_id=best_investment.investment_id,
        worst_investment_id=worst_investment.investment_id,
        portfolio_growth=portfolio_growth,
        monthly_growth_rate=monthly_growth_rate,
        yearly_growth_rate=yearly_growth_rate,
        investment_count=len(investments),
        active_investment_count=sum(
            1 for investment in investments if investment.status == InvestmentStatus.ACTIVE.value
        ),
    )


def _analytics_compound_growth_rates(
    investments: Sequence[InvestmentRecord],
    portfolio_growth: Decimal,
    reference_at_utc: datetime,
) -> tuple[Decimal, Decimal]:
    """Spread overall growth into compound monthly and yearly percentages.

    The horizon is the age of the oldest investment in 30-day months, never
    shorter than one month.
    """

    growth_base = Decimal("1") + portfolio_growth / Decimal("100")
    if growth_base <= ZERO:
        return ZERO, ZERO

    oldest_date = min(analytics_normalize_utc(investment.investment_date_utc) for investment in investments)
    elapsed_seconds = Decimal(str((reference_at_utc - oldest_date).total_seconds()))
    months_since_oldest = max(Decimal("1"), elapsed_seconds / _SECONDS_PER_GROWTH_MONTH)

    monthly_rate = growth_base ** (Decimal("1") / months_since_oldest) - 1
    yearly_rate = (1 + monthly_rate) ** 12 - 1
    return monthly_rate * Decimal("100"), yearly_rate * Decimal("100")


@dataclass
class _SectorAccumulator:
    """Mutable per-sector running totals."""

    total_invested: Decimal = ZERO
    total_current_value: Decimal = ZERO
    total_returns: Decimal = ZERO
    investment_count: int = 0


def analytics_analyze_by_sector(
    investments: Sequence[InvestmentRecord],
    sort_by: str | None = None,
) -> list[SectorAnalysis]:
    """Group portfolio investments by business sector.

    Args:
        investments: Investor's investments.
        sort_by: Optional ordering field (`total_invested`, `investment_count`,
            `roi` descending, or `sector` ascending). First-encountered order
            when omitted.

    Returns:
        list[SectorAnalysis]: One entry per sector, missing sectors grouped
        under `Unspecified`.

    Raises:
        ValueError: Raised when sort_by is not a supported field.
    """

    if sort_by is not None and sort_by not in _SECTOR_SORT_FIELDS:
        raise ValueError(f"unsupported sort_by={sort_by}")

    accumulators: dict[str, _SectorAccumulator] = {}
    for investment in investments:
        sector = analytics_resolve_sector_label(investment.business_sector)
        accumulator = accumulators.setdefault(sector, _SectorAccumulator())
        current_value = analytics_resolve_current_value(investment)
        accumulator.total_invested += investment.amount
        accumulator.total_current_value += current_value
        accumulator.total_returns += (
            analytics_investment_returns_total(investment) + current_value - investment.amount
        )
        accumulator.investment_count += 1

    total_invested = analytics_sum_amounts(investment.amount for investment in investments)
    sector_rows = [
        SectorAnalysis(
            sector=sector,
            total_invested=accumulator.total_invested,
            total_current_value=accumulator.total_current_value,
            total_returns=accumulator.total_returns,
            roi=analytics_percentage(accumulator.total_returns, accumulator.total_invested),
            investment_count=accumulator.investment_count,
            percentage=analytics_percentage(accumulator.total_invested, total_invested),
        )
        for sector, accumulator in accumulators.items()
    ]

    if sort_by == "sector":
        return sorted(sector_rows, key=lambda row: row.sector)
    if sort_by is not None:
        return sorted(sector_rows, key=lambda row: getattr(row, sort_by), reverse=True)
    return sector_rows


def analytics_generate_time_series(
    investments: Sequence[InvestmentRecord],
    months: int = 12,
    include_returns: bool = False,
    reference_at_utc: datetime | None = None,
) -> list[TimeSeriesPoint]:
    """Build cumulative month-end portfolio buckets for trailing months.

    Args:
        investments: Investor's investments.
        months: Number of trailing calendar months, including the current one.
        include_returns: Whether cumulative distributions are reported.
        reference_at_utc: Time whose month closes the window; defaults to now.

    Returns:
        list[TimeSeriesPoint]: Exactly `months` ascending buckets. Months
        without activity are present with carried-forward cumulative values.

    Raises:
        ValueError: Raised when months is lower than 1.
    """

    month_starts = analytics_trailing_month_starts(analytics_resolve_reference_time(reference_at_utc), months)
    dated_investments = sorted(
        (
            (analytics_normalize_utc(investment.investment_date_utc), investment)
            for investment in investments
        ),
        key=lambda dated_investment: dated_investment[0],
    )
    dated_returns = sorted(
        (
            (analytics_normalize_utc(investment_return.created_at_utc), investment_return.amount)
            for investment in investments
            for investment_return in investment.returns
        ),
        key=lambda dated_return: dated_return[0],
    )

    time_series: list[TimeSeriesPoint] = []
    investment_cursor = 0
    return_cursor = 0
    cumulative_invested = ZERO
    cumulative_current_value = ZERO
    cumulative_returns = ZERO

    for month_start in month_starts:
        month_opens_at = analytics_month_start_utc(month_start)
        month_closes_at = analytics_month_start_utc(analytics_shift_month(month_start, 1))
        new_investment_count = 0

        while investment_cursor < len(dated_investments) and dated_investments[investment_cursor][0] < month_closes_at:
            invested_at, investment = dated_investments[investment_cursor]
            cumulative_invested += investment.amount
            cumulative_current_value += analytics_resolve_current_value(investment)
            if invested_at >= month_opens_at:
                new_investment_count += 1
            investment_cursor += 1

        while return_cursor < len(dated_returns) and dated_returns[return_cursor][0] < month_closes_at:
            if include_returns:
                cumulative_returns += dated_returns[return_cursor][1]
            return_cursor += 1

        time_series.append(
            TimeSeriesPoint(
                month=analytics_month_key(month_start),
                total_invested=cumulative_invested,
                total_current_value=cumulative_current_value,
                total_returns=cumulative_returns,
                roi=analytics_percentage(
                    cumulative_current_value + cumulative_returns - cumulative_invested,
                    cumulative_invested,
                ),
                new_investment_count=new_investment_count,
            )
        )

    return time_series


__all__ = [
    "DEFAULT_RETURN_TYPE",
    "ESTIMATED_VALUE_MULTIPLIER",
    "analytics_analyze_by_sector",
    "analytics_calculate_investment_roi",
    "analytics_calculate_portfolio_metrics",
    "analytics_generate_time_series",
    "analytics_investment_returns_total",
    "analytics_resolve_current_value",
    "analytics_resolve_return_type",
]
