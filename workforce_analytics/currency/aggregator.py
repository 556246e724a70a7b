"""
Billable-rate aggregation across currencies.

Per-currency averages are plain means in the delegation's own currency.
The blended average only includes samples that can be converted into the
base currency; currencies without a factor are reported instead.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..config import DEFAULT_BASE_CURRENCY
from ..logging_config import get_logger
from ..numbers import round_half_up, to_finite_number
from ..records import as_delegation
from .models import CurrencyBreakdown
from .resolver import build_rate_table, convert_amount, normalize_currency, resolve_delegation_currency

logger = get_logger(__name__)


class BillableRateAggregator:
    """
    Aggregates billable rates of project delegations.

    An aggregator is bound to one base currency and rate table and holds no
    state between calls to ``aggregate``.
    """

    def __init__(self, base_currency: str, currency_rates: Optional[Mapping[Any, Any]] = None):
        """
        Initialize aggregator.

        Args:
            base_currency: Currency the blended average is expressed in
            currency_rates: Raw currency -> multiplier mapping
        """
        self.base_currency = normalize_currency(base_currency) or DEFAULT_BASE_CURRENCY
        self.rate_table = build_rate_table(currency_rates, self.base_currency)

    def aggregate(self, project_delegations: Iterable[Any]) -> CurrencyBreakdown:
        """
        Compute per-currency and blended averages.

        Args:
            project_delegations: Delegations (instances or mappings)

        Returns:
            CurrencyBreakdown for the qualifying delegations
        """
        totals: Dict[str, Dict[str, float]] = {}
        unsupported: List[str] = []
        base_sum = 0.0
        base_count = 0

        for raw in project_delegations or ():
            delegation = as_delegation(raw, kind='project')
            rate = to_finite_number(delegation.billable_rate)
            if rate is None:
                continue

            currency = resolve_delegation_currency(delegation, self.base_currency)
            bucket = totals.setdefault(currency, {'sum': 0.0, 'count': 0})
            bucket['sum'] += rate
            bucket['count'] += 1

            converted = convert_amount(rate, currency, self.base_currency, self.rate_table)
            if converted is not None:
                base_sum += converted
                base_count += 1
            elif currency != self.base_currency and currency not in unsupported:
                unsupported.append(currency)

        if unsupported:
            logger.warning("No conversion rate into %s for: %s",
                           self.base_currency, ', '.join(unsupported))

        per_currency = {
            currency: round_half_up(bucket['sum'] / bucket['count'], 2)
            for currency, bucket in totals.items()
        }
        average = round_half_up(base_sum / base_count, 2) if base_count > 0 else None

        return CurrencyBreakdown(
            base_currency=self.base_currency,
            average=average,
            per_currency=per_currency,
            unsupported_currencies=tuple(unsupported),
            samples=base_count
        )


def compute_billable_rate_averages(project_delegations: Iterable[Any],
                                   base_currency: str,
                                   currency_rates: Optional[Mapping[Any, Any]] = None) -> CurrencyBreakdown:
    """Functional shortcut for ``BillableRateAggregator(...).aggregate(...)``."""
    aggregator = BillableRateAggregator(base_currency, currency_rates)
    return aggregator.aggregate(project_delegations)
