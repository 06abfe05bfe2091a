"""Typed interfaces for database-layer services.

All SQL and ORM access must remain in the db package and its submodules.
"""

from __future__ import annotations

from typing import Protocol

from app.domain import BusinessRecord, HealthStatus, InvestmentRecord, UserRecord


class DatabaseHealthPort(Protocol):
    """Port definition for database connectivity verification."""

    def db_connection_label(self) -> str:
        """Return a stable label for the active database connection target.

        Returns:
            str: Database target label for diagnostics.

        Raises:
            RuntimeError: Raised when connection metadata is unavailable.
        """

    def db_check_health(self) -> HealthStatus:
        """Check database connectivity and return deterministic health payload.

        Returns:
            HealthStatus: Database health status payload.

        Raises:
            ConnectionError: Raised when database cannot be reached.
        """


class MarketplaceReadPort(Protocol):
    """Port definition for read-only marketplace queries feeding analytics."""

    def db_investment_list_for_investor(
        self,
        investor_id: str,
        include_returns: bool = False,
    ) -> list[InvestmentRecord]:
        """List one investor's investments, newest first.

        Args:
            investor_id: Investor user identifier.
            include_returns: Whether nested return rows are loaded.

        Returns:
            list[InvestmentRecord]: Investments with business title and sector.

        Raises:
            RuntimeError: Raised when database read fails.
        """

    def db_business_list_for_owner(self, owner_id: str) -> list[BusinessRecord]:
        """List one owner's businesses with nested investments and returns.

        Args:
            owner_id: Business owner user identifier.

        Returns:
            list[BusinessRecord]: Businesses, newest first.

        Raises:
            RuntimeError: Raised when database read fails.
        """

    def db_user_list(self) -> list[UserRecord]:
        """List all users as role/creation projections.

        Raises:
            RuntimeError: Raised when database read fails.
        """

    def db_business_list(self) -> list[BusinessRecord]:
        """List all businesses without nested investments.

        Raises:
            RuntimeError: Raised when database read fails.
        """

    def db_investment_list(self) -> list[InvestmentRecord]:
        """List all investments without nested returns.

        Raises:
            RuntimeError: Raised when database read fails.
        """
