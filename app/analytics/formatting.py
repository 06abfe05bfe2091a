"""Display formatting for amounts and ratios in exported reports."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

CURRENCY_SYMBOL = "₦"

_LARGE_NUMBER_STEPS = (
    (Decimal("1000000000"), "B"),
    (Decimal("1000000"), "M"),
    (Decimal("1000"), "K"),
)


def analytics_format_decimal(value: Decimal) -> str:
    """Render a decimal in plain positional notation without trailing zeros.

    Args:
        value: Amount or ratio to render.

    Returns:
        str: Text such as `1500.5`, `2000` or `0`, never scientific notation.
    """

    return format(value.normalize(), "f")


def analytics_format_currency(amount: Decimal) -> str:
    """Format an amount as whole Naira, e.g. `₦1,234,568` or `-₦50`."""

    rounded_amount = amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if rounded_amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(rounded_amount):,}"


def analytics_format_percentage(value: Decimal, decimals: int = 1) -> str:
    """Format a percentage value with a fixed number of decimals."""

    if decimals < 0:
        raise ValueError("decimals must be greater than or equal to 0")
    quantum = Decimal(1).scaleb(-decimals)
    return f"{value.quantize(quantum, rounding=ROUND_HALF_UP)}%"


def analytics_format_large_number(value: Decimal) -> str:
    """Abbreviate large values with K, M, or B suffixes."""

    for threshold, suffix in _LARGE_NUMBER_STEPS:
        if value >= threshold:
            scaled_value = (value / threshold).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
            return f"{scaled_value}{suffix}"
    return analytics_format_decimal(value)


__all__ = [
    "CURRENCY_SYMBOL",
    "analytics_format_currency",
    "analytics_format_decimal",
    "analytics_format_large_number",
    "analytics_format_percentage",
]
