"""
Data models for the workforce summary.
"""

from typing import Dict, Optional
from dataclasses import dataclass

from ..currency.models import CurrencyBreakdown
from ..forecasting.models import ForecastResult


@dataclass(frozen=True)
class Summary:
    """Decision-ready summary of a workspace's workforce."""

    total_members: int
    active_members: int
    members_on_leave: int
    bench_hours: float
    average_weekly_capacity: float
    active_assignments: int
    upcoming_payouts: int
    average_billable_rate: Optional[float]
    average_billable_rate_currency: str
    average_billable_rate_breakdown: CurrencyBreakdown
    forecasting: ForecastResult

    def get_summary_report(self) -> str:
        """Generate a text summary report."""
        breakdown = self.average_billable_rate_breakdown
        forecast = self.forecasting

        report = []
        report.append("=== WORKFORCE SUMMARY ===")
        report.append(f"Members: {self.total_members} "
                      f"({self.active_members} active, {self.members_on_leave} on leave)")
        report.append(f"Bench hours: {self.bench_hours:.2f} h/week")
        report.append(f"Average weekly capacity: {self.average_weekly_capacity:.1f} h")
        report.append(f"Active assignments: {self.active_assignments}")
        report.append(f"Upcoming payouts: {self.upcoming_payouts}")
        report.append("")
        report.append("BILLABLE RATES:")
        if self.average_billable_rate is None:
            report.append(f"  Blended average: n/a ({self.average_billable_rate_currency})")
        else:
            report.append(f"  Blended average: {self.average_billable_rate:.2f} "
                          f"{self.average_billable_rate_currency} ({breakdown.samples} samples)")
        for currency, average in breakdown.per_currency.items():
            report.append(f"  {currency}: {average:.2f}")
        if breakdown.unsupported_currencies:
            report.append(f"  Not converted: {', '.join(breakdown.unsupported_currencies)}")
        report.append("")
        report.append("UTILIZATION FORECAST:")
        if forecast.forecasted_utilization_percent is None:
            report.append("  No capacity snapshots")
        else:
            report.append(f"  Forecast: {forecast.forecasted_utilization_percent:.2f}% "
                          f"({forecast.trend}, slope {forecast.slope_per_period:+.4f}/period, "
                          f"{forecast.samples} samples)")

        return "\n".join(report)

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'total_members': self.total_members,
            'active_members': self.active_members,
            'members_on_leave': self.members_on_leave,
            'bench_hours': self.bench_hours,
            'average_weekly_capacity': self.average_weekly_capacity,
            'active_assignments': self.active_assignments,
            'upcoming_payouts': self.upcoming_payouts,
            'average_billable_rate': self.average_billable_rate,
            'average_billable_rate_currency': self.average_billable_rate_currency,
            'average_billable_rate_breakdown': self.average_billable_rate_breakdown.to_dict(),
            'forecasting': self.forecasting.to_dict()
        }
