"""
Domain Model Tests - Unit Tests for Rate Tables and Conversion State

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- trolley.domain.models (CurrencyRateTable, ConversionState, DEFAULT_OFFLINE_RATES)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from trolley.domain.errors import InvalidRateError
from trolley.domain.models import DEFAULT_OFFLINE_RATES, ConversionState, CurrencyRateTable


class TestCurrencyRateTable:
    def test_mapping_interface(self):
        table = CurrencyRateTable({"EUR": 1.16, "USD": 1})
        assert table["EUR"] == 1.16
        assert table["USD"] == 1.0
        assert isinstance(table["USD"], float)
        assert len(table) == 2
        assert set(table) == {"EUR", "USD"}
        assert table.get("JPY") is None

    def test_empty_table_is_falsy(self):
        assert not CurrencyRateTable()

    @pytest.mark.parametrize("rates", [
        {"eur": 1.0},
        {"EURO": 1.0},
        {"EUR": 0},
        {"EUR": -1.2},
        {"EUR": "1.2"},
        {"EUR": float("nan")},
        {"EUR": True},
    ])
    def test_invalid_entries_rejected(self, rates):
        with pytest.raises(InvalidRateError):
            CurrencyRateTable(rates)

    def test_from_raw_drops_invalid_entries(self):
        table = CurrencyRateTable.from_raw({"EUR": 1.16, "usd": 1.2, "JPY": -3, "CHF": None})
        assert table.to_json() == {"EUR": 1.16}

    def test_default_table_is_valid(self):
        table = CurrencyRateTable(DEFAULT_OFFLINE_RATES)
        assert len(table) == 31
        assert table["EUR"] == 1.1604
        assert "GBP" not in table


class TestConversionState:
    def test_unresolved_by_default(self):
        state = ConversionState("USD", "EUR")
        assert state.conversion_rate == 0.0
        assert not state.is_resolved
        assert state.needs_conversion

    def test_same_currency_needs_no_conversion(self):
        assert not ConversionState("GBP", "GBP").needs_conversion

    def test_resolved(self):
        assert ConversionState("USD", "EUR", 1.16).is_resolved
