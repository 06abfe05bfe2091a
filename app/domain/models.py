"""Typed domain models shared across runtime layers.

Records in this module are read-only snapshots produced by the db layer and
consumed by the analytics engine. Status and role fields keep the raw stored
string so values outside the known enumerations are still counted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum


class UserRole(str, Enum):
    """Platform roles used for dashboard selection and access checks."""

    INVESTOR = "INVESTOR"
    BUSINESS_OWNER = "BUSINESS_OWNER"
    ADMINISTRATOR = "ADMINISTRATOR"


class InvestmentStatus(str, Enum):
    """Lifecycle states of one investment commitment."""

    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    REJECTED = "REJECTED"


class BusinessStatus(str, Enum):
    """Listing states of one business opportunity."""

    OPEN = "OPEN"
    FUNDED = "FUNDED"
    CLOSED = "CLOSED"


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by health-check surfaces.

    Attributes:
        status: Overall status text for service health.
        detail: Additional message suitable for operational diagnostics.
    """

    status: str
    detail: str


@dataclass(frozen=True)
class ReturnRecord:
    """Cash distribution paid to an investor against one investment.

    Attributes:
        return_id: Return identifier.
        amount: Distributed amount.
        description: Optional free-text label used as the return type.
        created_at_utc: Distribution timestamp.
    """

    return_id: str
    amount: Decimal
    description: str | None
    created_at_utc: datetime


@dataclass(frozen=True)
class InvestmentRecord:
    """Capital commitment by one investor into one business.

    Attributes:
        investment_id: Investment identifier.
        amount: Committed amount.
        status: Raw investment status.
        investment_date_utc: Investment creation timestamp.
        business_id: Target business identifier.
        business_title: Target business title.
        business_sector: Optional target business industry label.
        investor_id: Optional investor identifier.
        current_value: Optional measured current value.
        returns: Distributions paid against this investment.
    """

    investment_id: str
    amount: Decimal
    status: str
    investment_date_utc: datetime
    business_id: str
    business_title: str
    business_sector: str | None
    investor_id: str | None = None
    current_value: Decimal | None = None
    returns: tuple[ReturnRecord, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class BusinessRecord:
    """Fundraising listing with its nested investments.

    Attributes:
        business_id: Business identifier.
        title: Listing title.
        industry: Optional industry label.
        target_capital: Funding target.
        current_raised: Capital raised as tracked on the listing.
        status: Raw listing status.
        created_at_utc: Listing creation timestamp.
        owner_id: Optional owning user identifier.
        investments: Investments placed into this listing.
    """

    business_id: str
    title: str
    industry: str | None
    target_capital: Decimal
    current_raised: Decimal
    status: str
    created_at_utc: datetime
    owner_id: str | None = None
    investments: tuple[InvestmentRecord, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class UserRecord:
    """Minimal user projection used for platform counting.

    Attributes:
        user_id: User identifier.
        role: Raw role value.
        created_at_utc: Registration timestamp.
    """

    user_id: str
    role: str
    created_at_utc: datetime


@dataclass(frozen=True)
class CallerSession:
    """Authenticated caller identity supplied by the upstream auth layer.

    Attributes:
        user_id: Caller user identifier.
        role: Raw caller role value.
    """

    user_id: str
    role: str
