"""
Currency module for base-currency resolution and billable-rate averaging.
"""

from .aggregator import BillableRateAggregator, compute_billable_rate_averages
from .models import CurrencyBreakdown
from .resolver import (
    CURRENCY_CANDIDATES,
    build_rate_table,
    convert_amount,
    normalize_currency,
    resolve_base_currency,
    resolve_delegation_currency,
)

__all__ = [
    "BillableRateAggregator",
    "CurrencyBreakdown",
    "CURRENCY_CANDIDATES",
    "build_rate_table",
    "compute_billable_rate_averages",
    "convert_amount",
    "normalize_currency",
    "resolve_base_currency",
    "resolve_delegation_currency",
]
