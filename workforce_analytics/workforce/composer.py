"""
Summary composer for workspace dashboards.

Combines membership bookkeeping with the two analytics:
1. Member counts, bench hours and average weekly capacity
2. Active assignments and payouts due in the upcoming window
3. Blended billable rates in the workspace's base currency
4. Utilization trend forecast from capacity snapshots
"""

from typing import Any, Iterable, List, Optional
from datetime import date, timedelta

from ..config import SummaryOptions
from ..currency.aggregator import BillableRateAggregator
from ..currency.resolver import normalize_currency, resolve_base_currency
from ..forecasting.models import UtilizationForecaster
from ..logging_config import get_logger
from ..numbers import parse_calendar_date, round_half_up, to_finite_number
from ..records import Delegation, WorkforceMember, as_delegation, as_member
from .models import Summary

logger = get_logger(__name__)

ACTIVE_MEMBER_STATUS = 'active'
ON_LEAVE_MEMBER_STATUS = 'on_leave'
ACTIVE_PROJECT_STATUSES = frozenset({'active', 'in_progress'})
ACTIVE_GIG_STATUSES = frozenset({'in_delivery', 'review', 'active'})
PENDING_PAYOUT_STATUSES = frozenset({'scheduled', 'processing'})


class SummaryComposer:
    """
    Orchestrates the analytics into one Summary.

    The composer performs counting and filtering itself and delegates the
    currency and forecasting arithmetic to the dedicated components.
    """

    def __init__(self, options: Any = None):
        """
        Initialize composer.

        Args:
            options: SummaryOptions instance or mapping of options
        """
        self.options = SummaryOptions.coerce(options)

    def compose(self,
                members: Iterable[Any] = (),
                pay_delegations: Iterable[Any] = (),
                project_delegations: Iterable[Any] = (),
                gig_delegations: Iterable[Any] = (),
                capacity_snapshots: Iterable[Any] = ()) -> Summary:
        """
        Build the workforce summary.

        Args:
            members: Workforce members (instances or mappings)
            pay_delegations: Payroll delegations
            project_delegations: Project delegations
            gig_delegations: Gig delegations
            capacity_snapshots: Capacity snapshots

        Returns:
            Summary combining counts, billable rates and forecast
        """
        member_list = [as_member(m) for m in members or ()]
        pay_list = [as_delegation(d, kind='pay') for d in pay_delegations or ()]
        project_list = [as_delegation(d, kind='project') for d in project_delegations or ()]
        gig_list = [as_delegation(d, kind='gig') for d in gig_delegations or ()]

        base_currency = self._resolve_base_currency(pay_list, project_list)

        aggregator = BillableRateAggregator(base_currency, self.options.currency_rates)
        breakdown = aggregator.aggregate(project_list)

        forecast_options = self.options.forecast_options
        forecaster = UtilizationForecaster(
            lookback_periods=forecast_options.lookback_periods,
            forecast_horizon=forecast_options.forecast_horizon
        )
        forecast = forecaster.forecast(capacity_snapshots)

        summary = Summary(
            total_members=len(member_list),
            active_members=sum(1 for m in member_list if m.status == ACTIVE_MEMBER_STATUS),
            members_on_leave=sum(1 for m in member_list if m.status == ON_LEAVE_MEMBER_STATUS),
            bench_hours=self.calculate_bench_hours(member_list),
            average_weekly_capacity=self.calculate_average_weekly_capacity(member_list),
            active_assignments=self.count_active_assignments(project_list, gig_list),
            upcoming_payouts=self.count_upcoming_payouts(pay_list),
            average_billable_rate=breakdown.average,
            average_billable_rate_currency=base_currency,
            average_billable_rate_breakdown=breakdown,
            forecasting=forecast
        )

        logger.debug("Composed summary for %d members (%s, %d rate samples, %d snapshots)",
                     summary.total_members, base_currency, breakdown.samples, forecast.samples)
        return summary

    def _resolve_base_currency(self,
                               pay_delegations: List[Delegation],
                               project_delegations: List[Delegation]) -> str:
        """Use the caller's base currency if valid, otherwise resolve it."""
        supplied = normalize_currency(self.options.base_currency)
        if supplied is not None:
            return supplied
        return resolve_base_currency(
            pay_delegations,
            project_delegations,
            fallback=self.options.fallback_currency
        )

    @staticmethod
    def calculate_bench_hours(members: List[WorkforceMember]) -> float:
        """
        Sum of unallocated weekly hours across members.

        Args:
            members: Workforce members

        Returns:
            Bench hours, each member contributing at least zero
        """
        total = 0.0
        for member in members:
            capacity = to_finite_number(member.capacity_hours_per_week) or 0.0
            allocation = to_finite_number(member.allocation_percent) or 0.0
            total += max(0.0, capacity * (1 - allocation / 100))
        return round_half_up(total, 2)

    @staticmethod
    def calculate_average_weekly_capacity(members: List[WorkforceMember]) -> float:
        """Mean of the positive weekly capacities (0 when none)."""
        samples = []
        for member in members:
            capacity = to_finite_number(member.capacity_hours_per_week)
            if capacity is not None and capacity > 0:
                samples.append(capacity)
        if not samples:
            return 0.0
        return round_half_up(sum(samples) / len(samples), 1)

    @staticmethod
    def count_active_assignments(project_delegations: List[Delegation],
                                 gig_delegations: List[Delegation]) -> int:
        """Project and gig delegations currently being delivered."""
        projects = sum(1 for d in project_delegations if d.normalized_status in ACTIVE_PROJECT_STATUSES)
        gigs = sum(1 for d in gig_delegations if d.normalized_status in ACTIVE_GIG_STATUSES)
        return projects + gigs

    def count_upcoming_payouts(self,
                               pay_delegations: List[Delegation],
                               reference_date: Optional[date] = None) -> int:
        """
        Count pending payouts due within the payout window.

        Args:
            pay_delegations: Payroll delegations
            reference_date: First day of the window (default: options or today)

        Returns:
            Number of scheduled/processing payouts due in the window
        """
        today = reference_date or self.options.reference_date or date.today()
        window_end = today + timedelta(days=self.options.payout_window_days)

        count = 0
        for delegation in pay_delegations:
            if delegation.normalized_status not in PENDING_PAYOUT_STATUSES:
                continue
            next_pay = parse_calendar_date(delegation.next_pay_date)
            if next_pay is None:
                continue
            if today <= next_pay <= window_end:
                count += 1
        return count


def compute_summary(members: Iterable[Any] = (),
                    pay_delegations: Iterable[Any] = (),
                    project_delegations: Iterable[Any] = (),
                    gig_delegations: Iterable[Any] = (),
                    capacity_snapshots: Iterable[Any] = (),
                    options: Any = None) -> Summary:
    """Functional shortcut for ``SummaryComposer(options).compose(...)``."""
    composer = SummaryComposer(options)
    return composer.compose(
        members=members,
        pay_delegations=pay_delegations,
        project_delegations=project_delegations,
        gig_delegations=gig_delegations,
        capacity_snapshots=capacity_snapshots
    )
