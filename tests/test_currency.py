"""
test_currency.py: Unit tests for currency normalization, resolution and
conversion.

Tests cover:
  - normalize_currency: trimming, casing, invalid input
  - resolve_delegation_currency: candidate order, metadata sources, fallback
  - resolve_base_currency: pay > project > fallback priority
  - build_rate_table: key/value filtering, base identity rate
  - convert_amount: identity, factor lookup, unusable samples
"""

import math

import pytest

from workforce_analytics.currency import (
    CURRENCY_CANDIDATES,
    build_rate_table,
    convert_amount,
    normalize_currency,
    resolve_base_currency,
    resolve_delegation_currency,
)
from workforce_analytics.records import Delegation


class TestNormalizeCurrency:

    @pytest.mark.parametrize("raw, expected", [
        ("usd", "USD"),
        ("  eur ", "EUR"),
        ("GBP", "GBP"),
    ])
    def test_valid_codes_are_canonicalized(self, raw, expected):
        assert normalize_currency(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", 840, 1.5, ["USD"], "US$", "U S D"])
    def test_invalid_input_returns_none(self, raw):
        assert normalize_currency(raw) is None


class TestDelegationCurrency:

    def test_record_currency_wins_over_metadata(self):
        delegation = {"currency": "eur", "metadata": {"currency": "GBP"}}
        assert resolve_delegation_currency(delegation, "USD") == "EUR"

    def test_currency_code_checked_before_metadata(self):
        delegation = {"currencyCode": "cad", "metadata": {"currency": "GBP"}}
        assert resolve_delegation_currency(delegation, "USD") == "CAD"

    @pytest.mark.parametrize("metadata, expected", [
        ({"currency": "gbp"}, "GBP"),
        ({"currencyCode": "jpy"}, "JPY"),
        ({"billableCurrency": "chf"}, "CHF"),
        ({"currency": "", "currencyCode": None, "billableCurrency": "sek"}, "SEK"),
    ])
    def test_metadata_sources_in_order(self, metadata, expected):
        assert resolve_delegation_currency({"metadata": metadata}, "USD") == expected

    def test_invalid_candidate_is_skipped(self):
        delegation = {"currency": "  ", "currencyCode": "n/a", "metadata": {"currency": "aud"}}
        assert resolve_delegation_currency(delegation, "USD") == "AUD"

    def test_fallback_when_nothing_resolves(self):
        assert resolve_delegation_currency({"metadata": "not-a-mapping"}, "usd") == "USD"

    def test_no_fallback_returns_none(self):
        assert resolve_delegation_currency({}) is None

    def test_accepts_delegation_instances(self):
        delegation = Delegation(kind="project", metadata={"billableCurrency": "nzd"})
        assert resolve_delegation_currency(delegation, "USD") == "NZD"

    def test_candidate_chain_has_five_sources(self):
        assert len(CURRENCY_CANDIDATES) == 5


class TestResolveBaseCurrency:

    def test_pay_currency_takes_priority(self):
        pay = [{"amount": 100}, {"amount": 200, "currency": "gbp"}]
        projects = [{"currency": "EUR"}]
        assert resolve_base_currency(pay, projects, "USD") == "GBP"

    def test_project_currency_used_without_pay_currency(self):
        pay = [{"amount": 100, "currency": "??"}]
        projects = [{"billableRate": 10}, {"metadata": {"billableCurrency": "eur"}}]
        assert resolve_base_currency(pay, projects, "USD") == "EUR"

    def test_fallback_when_no_records_carry_currency(self):
        assert resolve_base_currency([], [], "cad") == "CAD"

    def test_invalid_fallback_defaults_to_usd(self):
        assert resolve_base_currency([], [], None) == "USD"


class TestBuildRateTable:

    def test_filters_bad_keys_and_values(self):
        table = build_rate_table(
            {"eur": "1.1", "GBP": 1.25, "": 2, "XX1": 3, "JPY": "abc", "CHF": float("nan"), "SEK": None},
            "USD",
        )
        assert table == {"EUR": 1.1, "GBP": 1.25, "USD": 1.0}

    def test_base_identity_overrides_conflicting_value(self):
        table = build_rate_table({"USD": 0.9, "EUR": 1.1}, "USD")
        assert table["USD"] == 1.0

    def test_none_rates_yield_identity_only(self):
        assert build_rate_table(None, "EUR") == {"EUR": 1.0}

    def test_input_not_mutated(self):
        raw = {"usd": 2, "eur": 1.1}
        build_rate_table(raw, "USD")
        assert raw == {"usd": 2, "eur": 1.1}


class TestConvertAmount:

    def test_base_currency_is_identity(self):
        assert convert_amount(123.45, "usd", "USD", {"USD": 1.0}) == 123.45

    def test_missing_currency_means_base(self):
        assert convert_amount("50", None, "USD", {"USD": 1.0}) == 50.0

    def test_known_factor_is_applied(self):
        assert convert_amount(100, "GBP", "USD", {"USD": 1.0, "GBP": 1.25}) == pytest.approx(125.0)

    def test_unknown_currency_returns_none(self):
        assert convert_amount(100, "CAD", "USD", {"USD": 1.0}) is None

    @pytest.mark.parametrize("amount", [None, "abc", math.inf, -math.inf, math.nan, ""])
    def test_non_finite_amount_returns_none(self, amount):
        assert convert_amount(amount, "USD", "USD", {"USD": 1.0}) is None
