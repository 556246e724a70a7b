"""
Workforce Analytics Engine

Turns workforce records into a decision-ready summary: blended
multi-currency billable rates and a utilization trend forecast.
"""

from typing import Any, Mapping, Optional

from .config import ForecastOptions, SummaryOptions
from .currency import BillableRateAggregator, CurrencyBreakdown
from .forecasting import ForecastResult, UtilizationForecaster
from .records import CapacitySnapshot, Delegation, WorkforceMember
from .workforce import Summary, SummaryComposer


def _collection(data: Mapping, camel_key: str, snake_key: str) -> Any:
    value = data.get(camel_key)
    if value is None:
        value = data.get(snake_key)
    return value or ()


def compute_workforce_summary(data: Optional[Mapping[str, Any]] = None, options: Any = None) -> Summary:
    """
    Compute the workforce summary for one workspace.

    Args:
        data: Mapping with members, payDelegations, projectDelegations,
            gigDelegations and capacitySnapshots (snake_case keys accepted)
        options: SummaryOptions or mapping (baseCurrency, currencyRates,
            forecastOptions, ...)

    Returns:
        Summary value object
    """
    data = data or {}
    composer = SummaryComposer(options)
    return composer.compose(
        members=_collection(data, 'members', 'members'),
        pay_delegations=_collection(data, 'payDelegations', 'pay_delegations'),
        project_delegations=_collection(data, 'projectDelegations', 'project_delegations'),
        gig_delegations=_collection(data, 'gigDelegations', 'gig_delegations'),
        capacity_snapshots=_collection(data, 'capacitySnapshots', 'capacity_snapshots')
    )


__all__ = [
    "BillableRateAggregator",
    "CapacitySnapshot",
    "CurrencyBreakdown",
    "Delegation",
    "ForecastOptions",
    "ForecastResult",
    "Summary",
    "SummaryComposer",
    "SummaryOptions",
    "UtilizationForecaster",
    "WorkforceMember",
    "compute_workforce_summary",
]
