"""Database service for read-only marketplace queries feeding analytics."""
# pylint: disable=duplicate-code

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from app.domain import BusinessRecord, InvestmentRecord, ReturnRecord, UserRecord

from .interfaces import MarketplaceReadPort


class SQLAlchemyMarketplaceReadService(MarketplaceReadPort):
    """SQLAlchemy implementation for marketplace analytics reads."""

    _INVESTMENT_SELECT_COLUMNS = (
        "SELECT "
        "i.investment_id, i.investor_user_id, i.business_id, i.amount, i.current_value, i.status, "
        "i.created_at_utc, b.title AS business_title, b.industry AS business_industry "
        "FROM investments i JOIN businesses b ON b.business_id = i.business_id "
    )

    _BUSINESS_SELECT_COLUMNS = (
        "SELECT "
        "business_id, owner_user_id, title, industry, target_capital, current_raised, status, created_at_utc "
        "FROM businesses "
    )

    _RETURN_SELECT_COLUMNS = (
        "SELECT "
        "r.return_id, r.investment_id, r.amount, r.description, r.created_at_utc "
        "FROM investment_returns r JOIN investments i ON i.investment_id = r.investment_id "
    )

    def __init__(self, engine: Engine):
        """Initialize marketplace read service.

        Args:
            engine: SQLAlchemy engine used for reads.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when engine is invalid.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

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
            ValueError: Raised when investor_id is blank.
            RuntimeError: Raised when database read fails.
        """

        normalized_investor_id = self._db_validate_non_empty_text(investor_id, "investor_id")
        investment_rows = self._db_fetch_rows(
            self._INVESTMENT_SELECT_COLUMNS
            + "WHERE i.investor_user_id = :investor_id "
            + "ORDER BY i.created_at_utc desc, i.investment_id asc",
            {"investor_id": normalized_investor_id},
            "investor investment read failed",
        )
        return_rows: list[dict[str, Any]] = []
        if include_returns:
            return_rows = self._db_fetch_rows(
                self._RETURN_SELECT_COLUMNS
                + "WHERE i.investor_user_id = :investor_id "
                + "ORDER BY r.created_at_utc asc, r.return_id asc",
                {"investor_id": normalized_investor_id},
                "investor return read failed",
            )

        returns_by_investment = self._db_group_returns(return_rows)
        return [
            self._db_build_investment(row, returns_by_investment.get(str(row["investment_id"]), ()))
            for row in investment_rows
        ]

    def db_business_list_for_owner(self, owner_id: str) -> list[BusinessRecord]:
        """List one owner's businesses with nested investments and returns.

        Args:
            owner_id: Business owner user identifier.

        Returns:
            list[BusinessRecord]: Businesses, newest first, each carrying its
            investments newest first.

        Raises:
            ValueError: Raised when owner_id is blank.
            RuntimeError: Raised when database read fails.
        """

        normalized_owner_id = self._db_validate_non_empty_text(owner_id, "owner_id")
        parameters = {"owner_id": normalized_owner_id}
        business_rows = self._db_fetch_rows(
            self._BUSINESS_SELECT_COLUMNS
            + "WHERE owner_user_id = :owner_id "
            + "ORDER BY created_at_utc desc, business_id asc",
            parameters,
            "owner business read failed",
        )
        investment_rows = self._db_fetch_rows(
            self._INVESTMENT_SELECT_COLUMNS
            + "WHERE b.owner_user_id = :owner_id "
            + "ORDER BY i.created_at_utc desc, i.investment_id asc",
            parameters,
            "owner investment read failed",
        )
        return_rows = self._db_fetch_rows(
            self._RETURN_SELECT_COLUMNS
            + "JOIN businesses b ON b.business_id = i.business_id "
            + "WHERE b.owner_user_id = :owner_id "
            + "ORDER BY r.created_at_utc asc, r.return_id asc",
            parameters,
            "owner return read failed",
        )

        returns_by_investment = self._db_group_returns(return_rows)
        investments_by_business: dict[str, list[InvestmentRecord]] = {}
        for row in investment_rows:
            investment = self._db_build_investment(row, returns_by_investment.get(str(row["investment_id"]), ()))
            investments_by_business.setdefault(investment.business_id, []).append(investment)

        return [
            self._db_build_business(row, tuple(investments_by_business.get(str(row["business_id"]), [])))
            for row in business_rows
        ]

    def db_user_list(self) -> list[UserRecord]:
        """List all users as role/creation projections.

        Returns:
            list[UserRecord]: Users ordered by creation time.

        Raises:
            RuntimeError: Raised when database read fails.
        """

        user_rows = self._db_fetch_rows(
            "SELECT user_id, role, created_at_utc FROM users ORDER BY created_at_utc asc, user_id asc",
            {},
            "user read failed",
        )
        return [
            UserRecord(
                user_id=str(row["user_id"]),
                role=str(row["role"]),
                created_at_utc=self._db_parse_timestamp(row["created_at_utc"]),
            )
            for row in user_rows
        ]

    def db_business_list(self) -> list[BusinessRecord]:
        """List all businesses without nested investments.

        Returns:
            list[BusinessRecord]: Businesses ordered by creation time.

        Raises:
            RuntimeError: Raised when database read fails.
        """

        business_rows = self._db_fetch_rows(
            self._BUSINESS_SELECT_COLUMNS + "ORDER BY created_at_utc asc, business_id asc",
            {},
            "business read failed",
        )
        return [self._db_build_business(row, ()) for row in business_rows]

    def db_investment_list(self) -> list[InvestmentRecord]:
        """List all investments without nested returns.

        Returns:
            list[InvestmentRecord]: Investments ordered by creation time.

        Raises:
            RuntimeError: Raised when database read fails.
        """

        investment_rows = self._db_fetch_rows(
            self._INVESTMENT_SELECT_COLUMNS + "ORDER BY i.created_at_utc asc, i.investment_id asc",
            {},
            "investment read failed",
        )
        return [self._db_build_investment(row, ()) for row in investment_rows]

    def _db_fetch_rows(self, query: str, parameters: dict[str, Any], failure_message: str) -> list[dict[str, Any]]:
        """Execute one read query and return row mappings.

        Raises:
            RuntimeError: Raised with failure_message when the query fails.
        """

        try:
            with self._engine.connect() as connection:
                rows = connection.execute(text(query), parameters).mappings().all()
        except SQLAlchemyError as error:
            raise RuntimeError(failure_message) from error
        return [dict(row) for row in rows]

    def _db_group_returns(self, return_rows: list[dict[str, Any]]) -> dict[str, tuple[ReturnRecord, ...]]:
        grouped_returns: dict[str, list[ReturnRecord]] = {}
        for row in return_rows:
            grouped_returns.setdefault(str(row["investment_id"]), []).append(
                ReturnRecord(
                    return_id=str(row["return_id"]),
                    amount=self._db_parse_decimal(row["amount"]) or Decimal("0"),
                    description=row["description"],
                    created_at_utc=self._db_parse_timestamp(row["created_at_utc"]),
                )
            )
        return {investment_id: tuple(returns) for investment_id, returns in grouped_returns.items()}

    def _db_build_investment(
        self,
        row: dict[str, Any],
        investment_returns: tuple[ReturnRecord, ...],
    ) -> InvestmentRecord:
        return InvestmentRecord(
            investment_id=str(row["investment_id"]),
            amount=self._db_parse_decimal(row["amount"]) or Decimal("0"),
            status=str(row["status"]),
            investment_date_utc=self._db_parse_timestamp(row["created_at_utc"]),
            business_id=str(row["business_id"]),
            business_title=str(row["business_title"]),
            business_sector=row["business_industry"],
            investor_id=None if row["investor_user_id"] is None else str(row["investor_user_id"]),
            current_value=self._db_parse_decimal(row["current_value"]),
            returns=investment_returns,
        )

    def _db_build_business(
        self,
        row: dict[str, Any],
        investments: tuple[InvestmentRecord, ...],
    ) -> BusinessRecord:
        return BusinessRecord(
            business_id=str(row["business_id"]),
            title=str(row["title"]),
            industry=row["industry"],
            target_capital=self._db_parse_decimal(row["target_capital"]) or Decimal("0"),
            current_raised=self._db_parse_decimal(row["current_raised"]) or Decimal("0"),
            status=str(row["status"]),
            created_at_utc=self._db_parse_timestamp(row["created_at_utc"]),
            owner_id=None if row["owner_user_id"] is None else str(row["owner_user_id"]),
            investments=investments,
        )

    def _db_validate_non_empty_text(self, value: str, field_name: str) -> str:
        normalized_value = value.strip() if isinstance(value, str) else ""
        if not normalized_value:
            raise ValueError(f"{field_name} must not be blank")
        return normalized_value

    def _db_parse_decimal(self, value: Any) -> Decimal | None:
        """Convert a numeric column value to Decimal, keeping NULL as None.

        Raises:
            RuntimeError: Raised when the stored value is not numeric.
        """

        if value is None:
            return None
        if isinstance(value, Decimal):
            return value
        try:
            return Decimal(str(value))
        except InvalidOperation as error:
            raise RuntimeError(f"invalid numeric column value={value!r}") from error

    def _db_parse_timestamp(self, value: Any) -> datetime:
        """Convert a timestamp column value to an offset-aware UTC datetime.

        Drivers without native timestamp types return ISO-8601 text.

        Raises:
            RuntimeError: Raised when the stored value is not a timestamp.
        """

        if isinstance(value, str):
            try:
                value = datetime.fromisoformat(value)
            except ValueError as error:
                raise RuntimeError(f"invalid timestamp column value={value!r}") from error
        if not isinstance(value, datetime):
            raise RuntimeError(f"invalid timestamp column value={value!r}")
        if value.tzinfo is None or value.utcoffset() is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
