"""
Currency resolution and conversion.

Implements the rules used to decide a workspace's base currency:
1. Payroll currency is the most authoritative signal
2. Project billing currency is the secondary signal
3. A caller-supplied fallback keeps the resolution total
"""

import re
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple

from ..config import DEFAULT_BASE_CURRENCY
from ..logging_config import get_logger
from ..numbers import to_finite_number
from ..records import Delegation, as_delegation

logger = get_logger(__name__)

_CURRENCY_PATTERN = re.compile(r'[A-Z]+')


def normalize_currency(value: Any) -> Optional[str]:
    """
    Canonicalize a currency identifier.

    Args:
        value: Raw currency value (e.g. ' usd ')

    Returns:
        Uppercase alphabetic code, or None for anything unusable
    """
    if not isinstance(value, str):
        return None
    code = value.strip().upper()
    if not _CURRENCY_PATTERN.fullmatch(code):
        return None
    return code


def _metadata_value(key: str) -> Callable[[Delegation], Any]:
    def accessor(delegation: Delegation) -> Any:
        metadata = delegation.metadata
        if not isinstance(metadata, Mapping):
            return None
        return metadata.get(key)
    return accessor


# Sources tried in order; append here to support a new currency location.
CURRENCY_CANDIDATES: Tuple[Callable[[Delegation], Any], ...] = (
    lambda delegation: delegation.currency,
    lambda delegation: delegation.currency_code,
    _metadata_value('currency'),
    _metadata_value('currencyCode'),
    _metadata_value('billableCurrency'),
)


def resolve_delegation_currency(delegation: Any,
                                fallback_currency: Optional[str] = None) -> Optional[str]:
    """
    Find the currency a delegation is expressed in.

    Args:
        delegation: Delegation instance or mapping
        fallback_currency: Currency to use when the record carries none

    Returns:
        First normalized currency found, else the normalized fallback
    """
    record = as_delegation(delegation, kind='project')
    for candidate in CURRENCY_CANDIDATES:
        code = normalize_currency(candidate(record))
        if code is not None:
            return code
    return normalize_currency(fallback_currency)


def _first_currency(delegations: Iterable[Any]) -> Optional[str]:
    for delegation in delegations or ():
        code = resolve_delegation_currency(delegation)
        if code is not None:
            return code
    return None


def resolve_base_currency(pay_delegations: Iterable[Any] = (),
                          project_delegations: Iterable[Any] = (),
                          fallback: Optional[str] = DEFAULT_BASE_CURRENCY) -> str:
    """
    Pick the workspace's base currency.

    Args:
        pay_delegations: Payroll delegations, scanned first
        project_delegations: Project delegations, scanned second
        fallback: Default when no record carries a currency

    Returns:
        Currency code (never None)
    """
    code = _first_currency(pay_delegations)
    source = 'pay delegations'
    if code is None:
        code = _first_currency(project_delegations)
        source = 'project delegations'
    if code is None:
        code = normalize_currency(fallback) or DEFAULT_BASE_CURRENCY
        source = 'fallback'

    logger.debug("Resolved base currency %s from %s", code, source)
    return code


def build_rate_table(raw_rates: Optional[Mapping[Any, Any]],
                     base_currency: str) -> Dict[str, float]:
    """
    Build a currency -> multiplier lookup into the base currency.

    Args:
        raw_rates: Caller-supplied rates, possibly with bad keys or values
        base_currency: Currency every multiplier converts into

    Returns:
        Rate table; the base currency always maps to 1.0
    """
    table: Dict[str, float] = {}
    for key, value in (raw_rates or {}).items():
        code = normalize_currency(key)
        factor = to_finite_number(value)
        if code is None or factor is None:
            logger.debug("Dropping unusable currency rate %r=%r", key, value)
            continue
        table[code] = factor

    base = normalize_currency(base_currency) or DEFAULT_BASE_CURRENCY
    table[base] = 1.0
    return table


def convert_amount(amount: Any,
                   currency: Any,
                   base_currency: str,
                   rate_table: Mapping[str, float]) -> Optional[float]:
    """
    Convert an amount into the base currency.

    Args:
        amount: Raw amount
        currency: Currency of the amount (None means base currency)
        base_currency: Target currency
        rate_table: Output of build_rate_table

    Returns:
        Converted amount, or None if the amount is unusable or the currency
        has no conversion factor
    """
    value = to_finite_number(amount)
    if value is None:
        return None

    code = normalize_currency(currency) or base_currency
    if code == base_currency:
        return value

    factor = rate_table.get(code)
    if factor is None:
        return None
    return value * factor
