"""Calendar-month arithmetic for analytics bucketing.

Months are handled as `date` values pinned to day 1 and only formatted to the
sortable `YYYY-MM` key at output boundaries.
"""

from __future__ import annotations

from datetime import date, datetime, timezone


def analytics_normalize_utc(timestamp: datetime) -> datetime:
    """Return an offset-aware UTC timestamp, treating naive values as UTC.

    Args:
        timestamp: Naive or offset-aware timestamp.

    Returns:
        datetime: Offset-aware UTC timestamp.
    """

    if timestamp.tzinfo is None or timestamp.utcoffset() is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def analytics_month_start(timestamp: datetime) -> date:
    """Truncate a timestamp to the first day of its UTC calendar month."""

    normalized_timestamp = analytics_normalize_utc(timestamp)
    return date(normalized_timestamp.year, normalized_timestamp.month, 1)


def analytics_shift_month(month_start: date, delta: int) -> date:
    """Move a month start by a whole number of calendar months.

    Args:
        month_start: First day of a calendar month.
        delta: Months to move; negative values move backwards.

    Returns:
        date: First day of the shifted calendar month.
    """

    month_index = month_start.year * 12 + (month_start.month - 1) + delta
    return date(month_index // 12, month_index % 12 + 1, 1)


def analytics_month_start_utc(month_start: date) -> datetime:
    """Return the UTC midnight timestamp that opens a calendar month."""

    return datetime(month_start.year, month_start.month, 1, tzinfo=timezone.utc)


def analytics_trailing_month_starts(reference_at_utc: datetime, months: int) -> list[date]:
    """List the trailing calendar months ending with the reference month.

    Args:
        reference_at_utc: Timestamp whose month closes the window.
        months: Number of months in the window.

    Returns:
        list[date]: Ascending month starts, exactly `months` entries.

    Raises:
        ValueError: Raised when months is lower than 1.
    """

    if months < 1:
        raise ValueError("months must be greater than or equal to 1")

    reference_month = analytics_month_start(reference_at_utc)
    return [analytics_shift_month(reference_month, -offset) for offset in range(months - 1, -1, -1)]


def analytics_month_key(month_start: date) -> str:
    """Format a month start as a zero-padded `YYYY-MM` key."""

    return f"{month_start.year:04d}-{month_start.month:02d}"


def analytics_resolve_reference_time(reference_at_utc: datetime | None) -> datetime:
    """Return the given reference time in UTC, defaulting to now."""

    if reference_at_utc is None:
        return datetime.now(timezone.utc)
    return analytics_normalize_utc(reference_at_utc)


__all__ = [
    "analytics_month_key",
    "analytics_month_start",
    "analytics_month_start_utc",
    "analytics_normalize_utc",
    "analytics_resolve_reference_time",
    "analytics_shift_month",
    "analytics_trailing_month_starts",
]
