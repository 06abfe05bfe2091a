"""Grouping helpers shared by analytics aggregations."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from decimal import Decimal
from typing import TypeVar

_RecordT = TypeVar("_RecordT")

UNSPECIFIED_LABEL = "Unspecified"
ZERO = Decimal("0")


def analytics_resolve_sector_label(label: str | None) -> str:
    """Return a trimmed category label or the `Unspecified` sentinel."""

    if label is None or not label.strip():
        return UNSPECIFIED_LABEL
    return label.strip()


def analytics_count_by(
    records: Iterable[_RecordT],
    key_getter: Callable[[_RecordT], str | None],
) -> dict[str, int]:
    """Count records per category label in first-encountered order.

    Args:
        records: Records to count.
        key_getter: Callable resolving one record's category label.

    Returns:
        dict[str, int]: Label to record count mapping. Missing labels are
        counted under the `Unspecified` sentinel.
    """

    counts: dict[str, int] = {}
    for record in records:
        label = analytics_resolve_sector_label(key_getter(record))
        counts[label] = counts.get(label, 0) + 1
    return counts


def analytics_sum_amounts(amounts: Iterable[Decimal]) -> Decimal:
    """Sum decimal amounts starting from a decimal zero."""

    return sum(amounts, ZERO)


def analytics_percentage(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Return numerator / denominator × 100, or zero for a zero denominator."""

    if denominator == ZERO:
        return ZERO
    return numerator / denominator * Decimal("100")


__all__ = [
    "UNSPECIFIED_LABEL",
    "ZERO",
    "analytics_count_by",
    "analytics_percentage",
    "analytics_resolve_sector_label",
    "analytics_sum_amounts",
]
