"""Tests for the investor portfolio CSV export."""

from __future__ import annotations

import csv
import io
from datetime import datetime, timezone
from decimal import Decimal

from fastapi.testclient import TestClient

from app.analytics import MarketplaceAnalyticsService
from app.api.application import create_api_application
from app.api.routers.export import EXPORT_TITLE, api_render_portfolio_csv
from app.api.session import SESSION_ROLE_HEADER, SESSION_USER_ID_HEADER
from app.config import AppSettings
from app.domain import HealthStatus, InvestmentRecord


class _HealthyDatabaseService:
    """Health service double used to satisfy API factory dependencies."""

    def db_connection_label(self) -> str:
        return "sqlite://"

    def db_check_health(self) -> HealthStatus:
        return HealthStatus(status="ok", detail="sqlite connectivity verified")


class _PortfolioRepositoryStub:
    """Repository double returning two holdings for one investor."""

    def __init__(self, fail: bool = False) -> None:
        self._fail = fail

    def db_investment_list_for_investor(self, investor_id: str, include_returns: bool = False):
        """Return two investments or raise a read failure.

        Returns:
            list[InvestmentRecord]: Holdings for the investor.

        Raises:
            RuntimeError: Raised when the stub is configured to fail.
        """

        _ = include_returns
        if self._fail:
            raise RuntimeError("investor investment read failed")
        return [
            InvestmentRecord(
                investment_id="inv-2",
                amount=Decimal("1500000"),
                status="ACTIVE",
                investment_date_utc=datetime(2026, 4, 2, tzinfo=timezone.utc),
                business_id="biz-2",
                business_title="Lagos Cold Chain, Ltd",
                business_sector="Logistics",
                investor_id=investor_id,
                current_value=Decimal("1600000"),
            ),
            InvestmentRecord(
                investment_id="inv-1",
                amount=Decimal("500000"),
                status="PENDING",
                investment_date_utc=datetime(2026, 1, 15, tzinfo=timezone.utc),
                business_id="biz-1",
                business_title="Kano Grain Mill",
                business_sector=None,
                investor_id=investor_id,
                current_value=Decimal("500000"),
            ),
        ]


def _build_client(repository: _PortfolioRepositoryStub) -> TestClient:
    application = create_api_application(
        AppSettings(environment_name="test"),
        _HealthyDatabaseService(),
        MarketplaceAnalyticsService(repository=repository),
    )
    return TestClient(application)


def test_api_export_returns_csv_attachment_for_investor() -> None:
    """Return holdings and summary sections as a dated CSV attachment.

    Returns:
        None: Assertions validate headers and CSV rows.

    Raises:
        AssertionError: Raised when the export content differs.
    """

    response = _build_client(_PortfolioRepositoryStub()).get(
        "/export/portfolio.csv",
        headers={SESSION_USER_ID_HEADER: "investor-7", SESSION_ROLE_HEADER: "INVESTOR"},
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.headers["content-disposition"].startswith('attachment; filename="portfolio-export-')

    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0] == [EXPORT_TITLE]
    assert rows[2] == ["User: investor-7"]
    holdings_start = rows.index(["PORTFOLIO HOLDINGS"])
    assert rows[holdings_start + 2] == ["Lagos Cold Chain, Ltd", "Logistics", "1500000", "2026-04-02", "ACTIVE"]
    assert rows[holdings_start + 3] == ["Kano Grain Mill", "Unspecified", "500000", "2026-01-15", "PENDING"]

    summary_start = rows.index(["PORTFOLIO SUMMARY"])
    summary_rows = {row[0]: row[1:] for row in rows[summary_start + 2 :] if row}
    assert summary_rows["Total Invested"] == ["2000000", "₦2,000,000"]
    assert Decimal(summary_rows["Return Percentage"][0]) == Decimal("5")
    assert summary_rows["Return Percentage"][1] == "5.0%"
    assert summary_rows["Portfolio Size"] == ["2000000", "2.0M"]
    assert summary_rows["Active Investments"] == ["1", "1"]


def test_api_export_requires_investor_role() -> None:
    """Reject anonymous and non-investor callers."""

    client = _build_client(_PortfolioRepositoryStub())

    anonymous_response = client.get("/export/portfolio.csv")
    owner_response = client.get(
        "/export/portfolio.csv",
        headers={SESSION_USER_ID_HEADER: "owner-1", SESSION_ROLE_HEADER: "BUSINESS_OWNER"},
    )

    assert anonymous_response.status_code == 401
    assert owner_response.status_code == 403


def test_api_export_maps_read_failure_to_export_error() -> None:
    """Return 500 with the export error code when holdings cannot be read."""

    response = _build_client(_PortfolioRepositoryStub(fail=True)).get(
        "/export/portfolio.csv",
        headers={SESSION_USER_ID_HEADER: "investor-7", SESSION_ROLE_HEADER: "INVESTOR"},
    )

    assert response.status_code == 500
    assert response.json()["code"] == "EXPORT_FAILED"


def test_api_export_render_includes_generation_time() -> None:
    """Print the generation timestamp in the export header."""

    service = MarketplaceAnalyticsService(repository=_PortfolioRepositoryStub())
    report = service.analytics_portfolio_report("investor-7", reference_at_utc=datetime(2026, 5, 1, tzinfo=timezone.utc))

    document = api_render_portfolio_csv(report, "investor-7", datetime(2026, 5, 1, 8, 0, tzinfo=timezone.utc))

    assert document.splitlines()[1] == "Generated on: 2026-05-01T08:00:00+00:00"
