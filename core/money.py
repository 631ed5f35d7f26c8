"""
Money arithmetic for invoices.

Amounts are plain floats at full precision. There is no rounding and no
currency conversion; formatting happens only at display time. Balances are
never clamped: a negative balance is a real overpayment.
"""

import math
from typing import Any, Iterable


def coerce_amount(value: Any) -> float:
    """
    Convert editor input to a number.

    Numbers and numeric strings pass through as floats. Anything else
    (empty strings, None, garbage, NaN, infinity) becomes 0.0 rather than
    raising, so a bad keystroke never blocks an edit.
    """
    if isinstance(value, bool):
        return 0.0

    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return 0.0

    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0

    if not math.isfinite(number):
        return 0.0
    return number


def line_total(item) -> float:
    """quantity * rate for one line item."""
    return item.quantity * item.rate


def billed_total(items: Iterable) -> float:
    """Sum of line totals. An empty list bills 0."""
    return sum((line_total(item) for item in items), 0.0)


def paid_total(payments: Iterable) -> float:
    """Sum of all recorded payment amounts."""
    return sum((payment.amount for payment in payments), 0.0)


def balance(items: Iterable, payments: Iterable) -> float:
    """Billed total minus paid total. May be negative."""
    return billed_total(items) - paid_total(payments)


def format_amount(value: float, symbol: str = "₦") -> str:
    """
    Format an amount for display with thousands grouping.

    Up to two decimals are shown, trailing zeros dropped:
    100000 -> "₦100,000", 1234.5 -> "₦1,234.5", -500 -> "-₦500".
    """
    sign = "-" if value < 0 else ""
    grouped = f"{abs(value):,.2f}".rstrip("0").rstrip(".")
    return f"{sign}{symbol}{grouped}"
