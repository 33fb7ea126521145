"""Utility helpers for calculator modules.

All money is whole won held in ``int``. Rates are :class:`~decimal.Decimal`
and every product of an amount and a rate is floored, never rounded, so the
same inputs reproduce the same totals on every client.
"""

from __future__ import annotations

from decimal import ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP, Decimal, InvalidOperation
from numbers import Real
from typing import Any

from reviewpay.backend.errors import ArithmeticOverflowError, ValidationError

# Largest integer a JSON/JavaScript client can represent exactly.
MAX_SAFE_AMOUNT = 2**53 - 1


def ensure_amount(value: Any, field_name: str) -> int:
    """Return ``value`` as a non-negative ``int`` or raise ``ValidationError``."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Field '{field_name}' must be an integer")
    if value < 0:
        raise ValidationError(f"Field '{field_name}' cannot be negative")
    return check_amount(value, field_name)


def check_amount(value: int, field_name: str) -> int:
    """Raise ``ArithmeticOverflowError`` when ``value`` leaves the safe range."""

    if value > MAX_SAFE_AMOUNT:
        raise ArithmeticOverflowError(
            f"Field '{field_name}' exceeds the supported maximum of {MAX_SAFE_AMOUNT}"
        )
    return value


def ensure_rate(value: Any, field_name: str) -> Decimal:
    """Return ``value`` as a ``Decimal`` within ``[0, 1)``."""

    if isinstance(value, bool):
        raise ValidationError(f"Field '{field_name}' must be a decimal rate")
    if isinstance(value, Decimal):
        rate = value
    else:
        try:
            rate = Decimal(str(value))
        except (InvalidOperation, ValueError) as error:
            raise ValidationError(f"Field '{field_name}' must be a decimal rate") from error
    if not rate.is_finite() or rate < 0 or rate >= 1:
        raise ValidationError(f"Field '{field_name}' must be within [0, 1)")
    return rate


def floor_amount(amount: int, rate: Decimal) -> int:
    """Return ``floor(amount * rate)`` computed exactly."""

    product = Decimal(amount) * rate
    return int(product.to_integral_value(rounding=ROUND_FLOOR))


def ceil_divide(amount: int, divisor: Decimal) -> int:
    """Return ``ceil(amount / divisor)`` for a positive ``divisor``."""

    quotient = Decimal(amount) / divisor
    return int(quotient.to_integral_value(rounding=ROUND_CEILING))


def format_number(amount: int | Real | Decimal) -> str:
    """Return ``amount`` with thousands separators (``363000`` -> ``"363,000"``)."""

    if isinstance(amount, int):
        return f"{amount:,}"
    value = Decimal(str(amount))
    if value == value.to_integral_value():
        return f"{int(value):,}"
    # Up to three fraction digits, trailing zeros trimmed.
    text = f"{value.quantize(Decimal('0.001')):,}"
    return text.rstrip("0").rstrip(".")


def format_krw(amount: int | Real | Decimal) -> str:
    """Return ``amount`` as a won currency string (``363000`` -> ``"₩363,000"``)."""

    value = Decimal(str(amount)).to_integral_value(rounding=ROUND_FLOOR)
    if value < 0:
        return f"-₩{format_number(int(-value))}"
    return f"₩{format_number(int(value))}"


def format_won(amount: int) -> str:
    """Return the suffixed form used in messages (``12705`` -> ``"12,705원"``)."""

    return f"{format_number(amount)}원"


def format_percent(rate: Real | Decimal, decimals: int = 1) -> str:
    """Render a ratio as a percentage (``0.035`` -> ``"3.5%"``)."""

    if decimals < 0:
        raise ValidationError("decimals must be non-negative")
    percentage = Decimal(str(rate)) * 100
    quantum = Decimal(1).scaleb(-decimals)
    return f"{percentage.quantize(quantum, rounding=ROUND_HALF_UP):f}%"


__all__ = [
    "MAX_SAFE_AMOUNT",
    "ceil_divide",
    "check_amount",
    "ensure_amount",
    "ensure_rate",
    "floor_amount",
    "format_krw",
    "format_number",
    "format_percent",
    "format_won",
]
