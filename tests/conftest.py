"""
conftest.py: Shared pytest fixtures for the workforce analytics test suite.

All tests are pure unit tests; records are plain dictionaries shaped the way
the storage layer hands them over (camelCase keys).
"""

from datetime import date

import pytest


REFERENCE_DATE = date(2024, 6, 3)


@pytest.fixture
def reference_date():
    return REFERENCE_DATE


@pytest.fixture
def standard_rates():
    """USD-based rate table used by the blended-average scenarios."""
    return {"USD": 1, "EUR": 1.1, "GBP": 1.25}


@pytest.fixture
def mixed_currency_delegations():
    """
    Four project delegations: EUR 110, USD 90, GBP 75 and one USD entry
    without a usable billable rate.
    """
    return [
        {"status": "active", "billableRate": 110, "currency": "EUR"},
        {"status": "active", "billableRate": "90", "currencyCode": "usd"},
        {"status": "in_progress", "billableRate": 75, "metadata": {"billableCurrency": "GBP"}},
        {"status": "active", "billableRate": None, "currency": "USD"},
    ]


@pytest.fixture
def weekly_snapshots():
    """Four weekly snapshots, deliberately out of chronological order."""
    return [
        {"recordedFor": "2024-05-20", "utilizationPercent": 70},
        {"recordedFor": "2024-05-06", "utilizationPercent": 60},
        {"recordedFor": "2024-05-27", "utilizationPercent": "74"},
        {"recordedFor": "2024-05-13", "utilizationPercent": 64},
    ]


@pytest.fixture
def workspace_data(mixed_currency_delegations, weekly_snapshots):
    """A complete workspace payload for the summary entry point."""
    return {
        "members": [
            {"id": 1, "status": "active", "capacityHoursPerWeek": 40, "allocationPercent": 75},
            {"id": 2, "status": "active", "capacityHoursPerWeek": 32, "allocationPercent": 50},
            {"id": 3, "status": "on_leave", "capacityHoursPerWeek": 40, "allocationPercent": 0},
            {"id": 4, "status": "invited", "capacityHoursPerWeek": None, "allocationPercent": None},
        ],
        "payDelegations": [
            {"status": "scheduled", "amount": 4200, "currency": "usd", "nextPayDate": "2024-06-03"},
            {"status": "Processing", "amount": 3100, "currency": "USD", "nextPayDate": "2024-06-17"},
            {"status": "scheduled", "amount": 2800, "currency": "USD", "nextPayDate": "2024-06-18"},
            {"status": "paid", "amount": 2800, "currency": "USD", "nextPayDate": "2024-06-05"},
            {"status": "scheduled", "amount": 2800, "currency": "USD", "nextPayDate": "not-a-date"},
            {"status": "scheduled", "amount": 2800, "currency": "USD", "nextPayDate": "2024-06-02"},
        ],
        "projectDelegations": mixed_currency_delegations,
        "gigDelegations": [
            {"status": "in_delivery"},
            {"status": "REVIEW"},
            {"status": "active"},
            {"status": "cancelled"},
            {"status": None},
        ],
        "capacitySnapshots": weekly_snapshots,
    }
