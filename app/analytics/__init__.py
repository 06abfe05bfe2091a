"""Analytics layer package for portfolio, business and platform aggregations."""

from .business import (
    analytics_build_funding_milestones,
    analytics_calculate_business_metrics,
    analytics_calculate_monthly_trends,
    analytics_calculate_opportunity_metrics,
)
from .formatting import (
    analytics_format_currency,
    analytics_format_decimal,
    analytics_format_large_number,
    analytics_format_percentage,
)
from .interfaces import (
    BusinessMetrics,
    BusinessSummary,
    DashboardReport,
    FundingMilestone,
    GrowthWindow,
    MonthlyTrend,
    OpportunityMetrics,
    PlatformDistributions,
    PlatformGrowth,
    PlatformMetrics,
    PlatformMonthlyTrend,
    PlatformOverview,
    PortfolioMetrics,
    PortfolioReport,
    RecentActivity,
    SectorAnalysis,
    TimeSeriesPoint,
)
from .platform import analytics_calculate_platform_metrics
from .portfolio import (
    analytics_analyze_by_sector,
    analytics_calculate_investment_roi,
    analytics_calculate_portfolio_metrics,
    analytics_generate_time_series,
    analytics_resolve_current_value,
    analytics_resolve_return_type,
)
from .service import AnalyticsAccessError, MarketplaceAnalyticsService, analytics_resolve_role

__all__ = [
	"AnalyticsAccessError",
	"BusinessMetrics",
	"BusinessSummary",
	"DashboardReport",
	"FundingMilestone",
	"GrowthWindow",
	"MarketplaceAnalyticsService",
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
	"analytics_analyze_by_sector",
	"analytics_build_funding_milestones",
	"analytics_calculate_business_metrics",
	"analytics_calculate_investment_roi",
	"analytics_calculate_monthly_trends",
	"analytics_calculate_opportunity_metrics",
	"analytics_calculate_platform_metrics",
	"analytics_calculate_portfolio_metrics",
	"analytics_format_currency",
	"analytics_format_decimal",
	"analytics_format_large_number",
	"analytics_format_percentage",
	"analytics_generate_time_series",
	"analytics_resolve_current_value",
	"analytics_resolve_return_type",
	"analytics_resolve_role",
]
