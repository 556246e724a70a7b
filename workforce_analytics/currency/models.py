"""
Data models for billable-rate aggregation.
"""

from typing import Dict, Optional, Tuple
from dataclasses import dataclass, field


@dataclass(frozen=True)
class CurrencyBreakdown:
    """Per-currency and blended billable-rate averages."""

    base_currency: str
    average: Optional[float] = None
    per_currency: Dict[str, float] = field(default_factory=dict)
    unsupported_currencies: Tuple[str, ...] = ()
    samples: int = 0

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'base_currency': self.base_currency,
            'average': self.average,
            'per_currency': dict(self.per_currency),
            'unsupported_currencies': list(self.unsupported_currencies),
            'samples': self.samples
        }
