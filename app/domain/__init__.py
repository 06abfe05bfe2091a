"""Domain models used across application layer boundaries."""

from .models import (
    BusinessRecord,
    BusinessStatus,
    CallerSession,
    HealthStatus,
    InvestmentRecord,
    InvestmentStatus,
    ReturnRecord,
    UserRecord,
    UserRole,
)

__all__ = [
    "BusinessRecord",
    "BusinessStatus",
    "CallerSession",
    "HealthStatus",
    "InvestmentRecord",
    "InvestmentStatus",
    "ReturnRecord",
    "UserRecord",
    "UserRole",
]
