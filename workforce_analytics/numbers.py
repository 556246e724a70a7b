"""
Numeric and date coercion helpers shared by the analytics modules.

Workforce records arrive already deserialized but loosely typed: numbers may
be strings or Decimals, dates may be ISO strings, datetimes or garbage.
These helpers turn such values into something usable or into None.
"""

import math
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

import pandas as pd


def to_finite_number(value: Any) -> Optional[float]:
    """
    Coerce a value to a finite float.

    Args:
        value: Raw numeric value (int, float, Decimal, numeric string...)

    Returns:
        The float value, or None when the value is missing or not finite
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def round_half_up(value: float, places: int = 2) -> float:
    """Round to a fixed number of decimal places, halves away from zero."""
    quantum = Decimal(1).scaleb(-places)
    try:
        rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return value
    return float(rounded)


def _to_timestamp(value: Any) -> Optional[pd.Timestamp]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    if not isinstance(value, (str, date, datetime, pd.Timestamp)):
        return None
    try:
        timestamp = pd.to_datetime(value, errors='coerce')
    except (TypeError, ValueError, OverflowError):
        return None
    if timestamp is None or pd.isna(timestamp):
        return None
    return timestamp


def parse_timestamp(value: Any) -> Optional[pd.Timestamp]:
    """
    Parse a date-like value into a naive UTC timestamp.

    Args:
        value: date, datetime, pandas Timestamp or ISO string

    Returns:
        Timestamp, or None if the value cannot be parsed
    """
    timestamp = _to_timestamp(value)
    if timestamp is None:
        return None

    # Mixed aware/naive inputs must stay comparable
    if timestamp.tzinfo is not None:
        timestamp = timestamp.tz_convert('UTC').tz_localize(None)
    return timestamp


def parse_calendar_date(value: Any) -> Optional[date]:
    """
    Calendar date of a date-like value as written, in its own timezone.

    ``2024-06-17T23:30:00-05:00`` is June 17th here, not the UTC date.
    """
    timestamp = _to_timestamp(value)
    if timestamp is None:
        return None
    return timestamp.date()
