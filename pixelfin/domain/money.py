"""Amount sanitizing and cents arithmetic"""

import math
from typing import Any


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity"""
    return math.floor(value + 0.5)


def _coerce(value: Any) -> float:
    # bool is an int subclass but never a monetary amount
    if isinstance(value, bool) or value is None:
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def sanitize_amount_cents(value: Any) -> int:
    """
    Normalize arbitrary input into a non-negative amount in integer cents.

    Negative input is absolute-valued; non-numeric or non-finite input
    (including values that overflow once scaled to cents) yields 0.
    Never raises. A result of 0 means the input is unusable for a transaction.
    """
    numeric = _coerce(value)
    if not math.isfinite(numeric):
        return 0

    scaled = abs(numeric) * 100
    if not math.isfinite(scaled):
        return 0
    return round_half_up(scaled)


def sanitize_amount(value: Any) -> float:
    """Same as sanitize_amount_cents, expressed in currency units"""
    return sanitize_amount_cents(value) / 100


def entry_amount_cents(value: Any) -> int:
    """
    Cents for a user-entered amount, or 0 when it cannot be recorded.

    Unlike stored data, a negative entry is refused rather than absolute-valued.
    """
    if _coerce(value) < 0:
        return 0
    return sanitize_amount_cents(value)
