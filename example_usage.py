#!/usr/bin/env python3
"""
Example usage of the Workforce Analytics Engine.

This script demonstrates how to feed workspace records into the engine and
read back the blended billable rates and the utilization forecast.
"""

from datetime import date, timedelta

import pandas as pd

from workforce_analytics import compute_workforce_summary
from workforce_analytics.logging_config import setup_logging


def build_sample_data(today: date) -> dict:
    """Sample workspace as the storage layer would hand it over."""
    members = [
        {'id': 1, 'name': 'Amara', 'status': 'active', 'capacityHoursPerWeek': 40, 'allocationPercent': 75},
        {'id': 2, 'name': 'Jonas', 'status': 'active', 'capacityHoursPerWeek': 32, 'allocationPercent': 50},
        {'id': 3, 'name': 'Priya', 'status': 'on_leave', 'capacityHoursPerWeek': 40, 'allocationPercent': 0},
    ]
    pay_delegations = [
        {'status': 'scheduled', 'amount': '4200.00', 'currency': 'usd',
         'nextPayDate': (today + timedelta(days=5)).isoformat()},
        {'status': 'processing', 'amount': '3100.00', 'currency': 'USD',
         'nextPayDate': (today + timedelta(days=30)).isoformat()},
    ]
    project_delegations = [
        {'status': 'active', 'billableRate': '110', 'currency': 'EUR'},
        {'status': 'in_progress', 'billableRate': 90, 'metadata': {'currencyCode': 'usd'}},
        {'status': 'completed', 'billableRate': 75, 'metadata': {'billableCurrency': 'GBP'}},
        {'status': 'active', 'billableRate': 100, 'currency': 'CAD'},
    ]
    gig_delegations = [
        {'status': 'in_delivery'},
        {'status': 'Review'},
        {'status': 'cancelled'},
    ]

    # Weekly utilization history
    weeks = pd.date_range(end=pd.Timestamp(today), periods=6, freq='W-MON')
    capacity_snapshots = [
        {'recordedFor': week.date().isoformat(), 'utilizationPercent': value}
        for week, value in zip(weeks, [58, 61, 60, 66, 70, 73])
    ]

    return {
        'members': members,
        'payDelegations': pay_delegations,
        'projectDelegations': project_delegations,
        'gigDelegations': gig_delegations,
        'capacitySnapshots': capacity_snapshots,
    }


def main():
    print("=== Workforce Analytics Engine Demo ===\n")
    setup_logging(log_level="DEBUG")

    today = date.today()
    data = build_sample_data(today)

    print("1. Computing summary...")
    summary = compute_workforce_summary(data, {
        'currencyRates': {'USD': 1, 'EUR': 1.1, 'GBP': 1.25},
        'forecastOptions': {'lookbackPeriods': 4, 'forecastHorizon': 1},
        'referenceDate': today.isoformat(),
    })

    print("\n2. Summary report:")
    print(summary.get_summary_report())

    print("\n3. Serializable form:")
    print(pd.Series(summary.to_dict()).to_string())

    print("\n=== Demo Complete ===")


if __name__ == "__main__":
    main()
