"""
Input records consumed by the analytics engine.

Records are read-only snapshots handed over by the storage layer. Values are
kept as supplied; coercion to numbers and dates happens in the computations
so that malformed entries can be skipped rather than rejected.
"""

from typing import Any, Mapping, Optional
from dataclasses import dataclass


def _pick(data: Mapping, *keys: str, default: Any = None) -> Any:
    """Return the first key present in data (camelCase or snake_case)."""
    for key in keys:
        if key in data:
            return data[key]
    return default


@dataclass(frozen=True)
class Delegation:
    """A pay, project or gig delegation of a workforce member."""

    kind: str
    status: Optional[str] = None
    amount: Any = None
    billable_rate: Any = None
    currency: Any = None
    currency_code: Any = None
    metadata: Any = None
    next_pay_date: Any = None
    start_date: Any = None
    end_date: Any = None

    @classmethod
    def from_dict(cls, data: Mapping, kind: str) -> 'Delegation':
        """Create Delegation instance from dictionary."""
        return cls(
            kind=kind,
            status=_pick(data, 'status'),
            amount=_pick(data, 'amount'),
            billable_rate=_pick(data, 'billableRate', 'billable_rate'),
            currency=_pick(data, 'currency'),
            currency_code=_pick(data, 'currencyCode', 'currency_code'),
            metadata=_pick(data, 'metadata'),
            next_pay_date=_pick(data, 'nextPayDate', 'next_pay_date'),
            start_date=_pick(data, 'startDate', 'start_date'),
            end_date=_pick(data, 'endDate', 'end_date'),
        )

    @property
    def normalized_status(self) -> str:
        """Lowercased, trimmed status ('' when missing)."""
        if not isinstance(self.status, str):
            return ''
        return self.status.strip().lower()


@dataclass(frozen=True)
class CapacitySnapshot:
    """Point-in-time utilization measurement for a workspace."""

    recorded_for: Any
    utilization_percent: Any

    @classmethod
    def from_dict(cls, data: Mapping) -> 'CapacitySnapshot':
        """Create CapacitySnapshot instance from dictionary."""
        return cls(
            recorded_for=_pick(data, 'recordedFor', 'recorded_for'),
            utilization_percent=_pick(data, 'utilizationPercent', 'utilization_percent'),
        )


@dataclass(frozen=True)
class WorkforceMember:
    """Represents a workforce member with weekly capacity and allocation."""

    member_id: Any = None
    name: Optional[str] = None
    status: Optional[str] = None
    capacity_hours_per_week: Any = None
    allocation_percent: Any = None

    @classmethod
    def from_dict(cls, data: Mapping) -> 'WorkforceMember':
        """Create WorkforceMember instance from dictionary."""
        return cls(
            member_id=_pick(data, 'id', 'memberId', 'member_id'),
            name=_pick(data, 'name'),
            status=_pick(data, 'status'),
            capacity_hours_per_week=_pick(data, 'capacityHoursPerWeek', 'capacity_hours_per_week'),
            allocation_percent=_pick(data, 'allocationPercent', 'allocation_percent'),
        )


def as_delegation(record: Any, kind: str) -> Delegation:
    """Accept a Delegation or a mapping and return a Delegation."""
    if isinstance(record, Delegation):
        return record
    return Delegation.from_dict(record or {}, kind=kind)


def as_snapshot(record: Any) -> CapacitySnapshot:
    """Accept a CapacitySnapshot or a mapping and return a CapacitySnapshot."""
    if isinstance(record, CapacitySnapshot):
        return record
    return CapacitySnapshot.from_dict(record or {})


def as_member(record: Any) -> WorkforceMember:
    """Accept a WorkforceMember or a mapping and return a WorkforceMember."""
    if isinstance(record, WorkforceMember):
        return record
    return WorkforceMember.from_dict(record or {})
