"""JSON serialization for analytics report contracts.

Decimal amounts and ratios are emitted as plain positional strings to keep
exact values; timestamps are ISO-8601.
"""

from __future__ import annotations

from decimal import Decimal

from app.analytics import (
    BusinessMetrics,
    DashboardReport,
    PlatformMetrics,
    PortfolioReport,
    analytics_format_decimal,
    analytics_resolve_current_value,
    analytics_resolve_return_type,
)
from app.domain import BusinessRecord, InvestmentRecord, UserRecord


def _api_decimal(value: Decimal) -> str:
    return analytics_format_decimal(value)


def api_serialize_investment(investment: InvestmentRecord) -> dict[str, object]:
    """Serialize one investment with its resolved current value.

    Args:
        investment: Investment record.

    Returns:
        dict[str, object]: JSON-serializable investment payload.
    """

    return {
        "investment_id": investment.investment_id,
        "amount": _api_decimal(investment.amount),
        "current_value": _api_decimal(analytics_resolve_current_value(investment)),
        "current_value_estimated": investment.current_value is None,
        "investment_date_utc": investment.investment_date_utc.isoformat(),
        "status": investment.status,
        "investor_id": investment.investor_id,
        "business": {
            "business_id": investment.business_id,
            "title": investment.business_title,
            "sector": investment.business_sector,
        },
        "returns": [
            {
                "return_id": investment_return.return_id,
                "amount": _api_decimal(investment_return.amount),
                "type": analytics_resolve_return_type(investment_return),
                "date_utc": investment_return.created_at_utc.isoformat(),
            }
            for investment_return in investment.returns
        ],
    }


def api_serialize_business(business: BusinessRecord) -> dict[str, object]:
    """Serialize one business listing without nested investments."""

    return {
        "business_id": business.business_id,
        "title": business.title,
        "industry": business.industry,
        "target_capital": _api_decimal(business.target_capital),
        "current_raised": _api_decimal(business.current_raised),
        "status": business.status,
        "created_at_utc": business.created_at_utc.isoformat(),
    }


def api_serialize_user(user: UserRecord) -> dict[str, object]:
    """Serialize one user projection."""

    return {
        "user_id": user.user_id,
        "role": user.role,
        "created_at_utc": user.created_at_utc.isoformat(),
    }


def api_serialize_portfolio_report(report: PortfolioReport) -> dict[str, object]:
    """Serialize the investor portfolio report.

    Args:
        report: Portfolio report.

    Returns:
        dict[str, object]: JSON-serializable report payload.
    """

    metrics = report.metrics
    return {
        "portfolio_metrics": {
            "total_invested": _api_decimal(metrics.total_invested),
            "total_current_value": _api_decimal(metrics.total_current_value),
            "total_returns": _api_decimal(metrics.total_returns),
            "return_percentage": _api_decimal(metrics.return_percentage),
            "net_gain": _api_decimal(metrics.net_gain),
            "roi": _api_decimal(metrics.roi),
            "average_roi": _api_decimal(metrics.average_roi),
            "best_investment_id": metrics.best_investment_id,
            "worst_investment_id": metrics.worst_investment_id,
            "portfolio_growth": _api_decimal(metrics.portfolio_growth),
            "monthly_growth_rate": _api_decimal(metrics.monthly_growth_rate),
            "yearly_growth_rate": _api_decimal(metrics.yearly_growth_rate),
        },
        "sector_analysis": [
            {
                "sector": sector.sector,
                "total_invested": _api_decimal(sector.total_invested),
                "total_current_value": _api_decimal(sector.total_current_value),
                "total_returns": _api_decimal(sector.total_returns),
                "roi": _api_decimal(sector.roi),
                "investment_count": sector.investment_count,
                "percentage": _api_decimal(sector.percentage),
            }
            for sector in report.sector_analysis
        ],
        "time_series": [
            {
                "month": point.month,
                "total_invested": _api_decimal(point.total_invested),
                "total_current_value": _api_decimal(point.total_current_value),
                "total_returns": _api_decimal(point.total_returns),
                "roi": _api_decimal(point.roi),
                "new_investment_count": point.new_investment_count,
            }
            for point in report.time_series
        ],
        "investments": [api_serialize_investment(investment) for investment in report.investments],
        "summary": {
            "total_investments": report.total_investments,
            "active_investments": report.active_investments,
            "total_invested": _api_decimal(metrics.total_invested),
            "total_current_value": _api_decimal(metrics.total_current_value),
            "total_returns": _api_decimal(metrics.total_returns),
        },
    }


def api_serialize_business_metrics(metrics: BusinessMetrics) -> dict[str, object]:
    """Serialize the business-owner report."""

    summary = metrics.summary
    return {
        "opportunities": [
            {
                "business_id": opportunity.business_id,
                "title": opportunity.title,
                "status": opportunity.status,
                "created_at_utc": opportunity.created_at_utc.isoformat(),
                "target_capital": _api_decimal(opportunity.target_capital),
                "current_raised": _api_decimal(opportunity.current_raised),
                "capital_raised": _api_decimal(opportunity.capital_raised),
                "funding_progress": _api_decimal(opportunity.funding_progress),
                "investor_count": opportunity.investor_count,
                "investment_count": opportunity.investment_count,
                "status_distribution": opportunity.status_distribution,
            }
            for opportunity in metrics.opportunities
        ],
        "summary": {
            "total_opportunities": summary.total_opportunities,
            "total_capital_raised": _api_decimal(summary.total_capital_raised),
            "total_target_capital": _api_decimal(summary.total_target_capital),
            "total_investors": summary.total_investors,
            "active_opportunities": summary.active_opportunities,
            "pending_investments": summary.pending_investments,
            "average_investment_size": _api_decimal(summary.average_investment_size),
            "capital_utilization_rate": _api_decimal(summary.capital_utilization_rate),
        },
        "monthly_trends": [
            {
                "month": trend.month,
                "new_investments": trend.new_investments,
                "total_amount": _api_decimal(trend.total_amount),
                "new_investors": trend.new_investors,
            }
            for trend in metrics.monthly_trends
        ],
        "funding_milestones": [
            {
                "date_utc": milestone.date_utc.isoformat(),
                "amount": _api_decimal(milestone.amount),
                "cumulative_amount": _api_decimal(milestone.cumulative_amount),
                "investor_count": milestone.investor_count,
                "milestone": milestone.milestone,
            }
            for milestone in metrics.funding_milestones
        ],
        "recent_investments": [api_serialize_investment(investment) for investment in metrics.recent_investments],
    }


def api_serialize_platform_metrics(metrics: PlatformMetrics) -> dict[str, object]:
    """Serialize the administrator platform report."""

    overview = metrics.overview
    growth_payload = {}
    for window_name, window in (("monthly", metrics.growth.monthly), ("yearly", metrics.growth.yearly)):
        growth_payload[window_name] = {
            "since_utc": window.since_utc.isoformat(),
            "new_users": window.new_users,
            "new_businesses": window.new_businesses,
            "new_investments": window.new_investments,
        }

    return {
        "overview": {
            "total_users": overview.total_users,
            "total_businesses": overview.total_businesses,
            "total_investments": overview.total_investments,
            "total_volume": _api_decimal(overview.total_volume),
            "average_investment_size": _api_decimal(overview.average_investment_size),
            "investment_success_rate": _api_decimal(overview.investment_success_rate),
            "platform_growth_rate": _api_decimal(overview.platform_growth_rate),
        },
        "distributions": {
            "users_by_role": metrics.distributions.users_by_role,
            "businesses_by_industry": metrics.distributions.businesses_by_industry,
            "investments_by_status": metrics.distributions.investments_by_status,
        },
        "growth": growth_payload,
        "recent_activity": {
            "users": [api_serialize_user(user) for user in metrics.recent_activity.users],
            "businesses": [api_serialize_business(business) for business in metrics.recent_activity.businesses],
            "investments": [
                api_serialize_investment(investment) for investment in metrics.recent_activity.investments
            ],
        },
        "monthly_trends": [
            {
                "month": trend.month,
                "new_users": trend.new_users,
                "new_businesses": trend.new_businesses,
                "new_investments": trend.new_investments,
                "investment_volume": _api_decimal(trend.investment_volume),
            }
            for trend in metrics.monthly_trends
        ],
    }


def api_serialize_dashboard_report(dashboard: DashboardReport) -> dict[str, object]:
    """Serialize a role-selected dashboard report with its kind tag."""

    if isinstance(dashboard.report, PortfolioReport):
        data = api_serialize_portfolio_report(dashboard.report)
    elif isinstance(dashboard.report, BusinessMetrics):
        data = api_serialize_business_metrics(dashboard.report)
    else:
        data = api_serialize_platform_metrics(dashboard.report)
    return {"kind": dashboard.kind, "data": data}


__all__ = [
    "api_serialize_business",
    "api_serialize_business_metrics",
    "api_serialize_dashboard_report",
    "api_serialize_investment",
    "api_serialize_platform_metrics",
    "api_serialize_portfolio_report",
    "api_serialize_user",
]
