"""
Currency Converter Tests - Unit Tests for Conversion and Rate Fetching

This module tests CurrencyConverter: conversion with a resolved rate, with
the offline table and with no data at all; the asynchronous fetch and its
error reporting; and the idempotent seeding of the offline table.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- trolley.application.currency_converter (CurrencyConverter)
- trolley.adapters.persistence.rate_store (RateStore on tmp_path)
- trolley.adapters.providers (RatesProvider spec for mocks, FixerProvider)
- unittest.mock (Mock for provider mocking)
- pytest (testing framework)
"""
import asyncio
import json
import logging
from decimal import Decimal

import pytest  # Testing framework for writing and running tests

from unittest.mock import Mock  # Mock objects for testing without real API calls

from trolley.adapters.persistence.rate_store import RateStore
from trolley.adapters.providers.base import RatesProvider
from trolley.adapters.providers.fixer import FixerProvider
from trolley.application.currency_converter import CurrencyConverter
from trolley.domain.errors import (
    InvalidURLError,
    MalformedResponseError,
    RatesMissingError,
    TransportError,
)
from trolley.domain.models import DEFAULT_OFFLINE_RATES, CurrencyRateTable


@pytest.fixture
def store(tmp_path):
    return RateStore(tmp_path / "offline_rates.json")


@pytest.fixture
def provider():
    mock_provider = Mock(spec=RatesProvider)
    mock_provider.endpoint.return_value = "https://api.fixer.io/latest?base=USD&symbols=EUR"
    return mock_provider


def _converter(provider, store, base="USD", local="EUR", **kwargs):
    return CurrencyConverter(
        provider=provider, store=store, base_currency=base, local_currency=local, **kwargs
    )


class TestConvert:
    def test_uses_offline_table_when_unresolved(self, provider, store):
        store.save(CurrencyRateTable({"EUR": 1.16}))
        converter = _converter(provider, store)

        assert converter.conversion_rate == 0.0
        assert converter.convert(100) == pytest.approx(116.0)

    def test_identity_when_no_rate_known(self, provider, store):
        store.save(CurrencyRateTable({"JPY": 138.54}))
        converter = _converter(provider, store)

        assert converter.convert(42.5) == 42.5

    def test_identity_when_store_missing(self, provider, store):
        assert _converter(provider, store).convert(19.99) == 19.99

    def test_identity_when_store_corrupt(self, provider, store, caplog):
        store.path.write_text("{broken", encoding="utf-8")
        converter = _converter(provider, store)

        with caplog.at_level(logging.WARNING):
            assert converter.convert(10.0) == 10.0
        assert any("1.0" in r.getMessage() for r in caplog.records)

    def test_identity_when_store_not_utf8(self, provider, store):
        store.path.write_bytes(b'{"OfflineRates": {"EUR": 1.16}, "x": "\xff\xfe"}')
        converter = _converter(provider, store)

        assert converter.convert(100) == 100
        assert converter.convert_decimal(Decimal("100")) == Decimal("100.00")

    @pytest.mark.parametrize("value", [0.0, 1.0, 19.99, -5.5, 1e9])
    def test_resolved_rate_multiplies(self, provider, store, value):
        store.save(CurrencyRateTable({"EUR": 9.99}))
        converter = _converter(provider, store, conversion_rate=1.5)

        assert converter.convert(value) == value * 1.5

    def test_convert_decimal_rounds_to_cents(self, provider, store):
        converter = _converter(provider, store, conversion_rate=1.16)

        assert converter.convert_decimal(Decimal("100")) == Decimal("116.00")
        assert converter.convert_decimal(Decimal("19.99")) == Decimal("23.19")

    def test_convert_decimal_identity(self, provider, store):
        assert _converter(provider, store).convert_decimal(Decimal("2.005")) == Decimal("2.01")


class TestFetchRates:
    def test_same_currency_is_noop(self, provider, store):
        converter = _converter(provider, store, base="GBP", local="GBP")
        callback = Mock()

        error = asyncio.run(converter.fetch_rates(callback))

        assert error is None
        callback.assert_called_once_with(None)
        provider.endpoint.assert_not_called()
        provider.latest.assert_not_called()
        assert converter.conversion_rate == 0.0

    def test_success_commits_rate_and_persists(self, provider, store):
        store.save(CurrencyRateTable(DEFAULT_OFFLINE_RATES))
        provider.latest.return_value = {"base": "USD", "rates": {"EUR": 0.92}}
        converter = _converter(provider, store)
        callback = Mock()

        error = asyncio.run(converter.fetch_rates(callback))

        assert error is None
        callback.assert_called_once_with(None)
        provider.latest.assert_called_once_with("USD", "EUR")
        assert converter.conversion_rate == 0.92
        assert converter.convert(100) == 100 * 0.92
        assert store.load() == {"EUR": 0.92}

    def test_rates_missing(self, provider, store):
        store.save(CurrencyRateTable({"EUR": 1.16}))
        provider.latest.return_value = {"base": "USD", "date": "2017-08-23"}
        converter = _converter(provider, store)
        callback = Mock()

        error = asyncio.run(converter.fetch_rates(callback))

        assert isinstance(error, RatesMissingError)
        assert error.payload == {"base": "USD", "date": "2017-08-23"}
        callback.assert_called_once_with(error)
        assert converter.conversion_rate == 0.0
        assert store.load() == {"EUR": 1.16}

    def test_rates_not_a_mapping(self, provider, store):
        provider.latest.return_value = {"rates": [0.92]}
        error = asyncio.run(_converter(provider, store).fetch_rates())
        assert isinstance(error, RatesMissingError)

    def test_falls_back_to_offline_rate(self, provider, store):
        store.save(CurrencyRateTable({"EUR": 1.16}))
        provider.latest.return_value = {"rates": {"JPY": 138.54}}
        converter = _converter(provider, store)

        error = asyncio.run(converter.fetch_rates())

        assert error is None
        assert converter.conversion_rate == 1.16
        assert store.load() == {"JPY": 138.54}

    def test_rate_missing_everywhere(self, provider, store):
        store.save(CurrencyRateTable({"CHF": 1.24}))
        provider.latest.return_value = {"rates": {"JPY": 138.54}}
        converter = _converter(provider, store)

        error = asyncio.run(converter.fetch_rates())

        assert isinstance(error, RatesMissingError)
        assert error.payload == {}
        assert converter.conversion_rate == 0.0
        assert store.load() == {"CHF": 1.24}

    def test_transport_error(self, provider, store):
        failure = TransportError(ConnectionError("network down"))
        provider.latest.side_effect = failure
        converter = _converter(provider, store, conversion_rate=1.1)
        callback = Mock()

        error = asyncio.run(converter.fetch_rates(callback))

        assert error is failure
        assert isinstance(error.cause, ConnectionError)
        callback.assert_called_once_with(failure)
        assert converter.conversion_rate == 1.1

    def test_malformed_response(self, provider, store):
        provider.latest.side_effect = MalformedResponseError("Rates API returned non-object JSON")
        error = asyncio.run(_converter(provider, store).fetch_rates())
        assert isinstance(error, MalformedResponseError)

    def test_invalid_url(self, store):
        converter = _converter(FixerProvider(base_url="not a url"), store)
        callback = Mock()

        error = asyncio.run(converter.fetch_rates(callback))

        assert isinstance(error, InvalidURLError)
        callback.assert_called_once_with(error)

    def test_concurrent_fetches_each_request(self, provider, store):
        provider.latest.return_value = {"rates": {"EUR": 0.92}}
        converter = _converter(provider, store)

        async def fetch_twice():
            return await asyncio.gather(converter.fetch_rates(), converter.fetch_rates())

        assert asyncio.run(fetch_twice()) == [None, None]
        assert provider.latest.call_count == 2
        assert converter.conversion_rate == 0.92


class TestSetupFallbackTable:
    def test_seeds_empty_store(self, provider, store):
        converter = _converter(provider, store)

        assert converter.setup_fallback_table() is True
        assert store.load() == DEFAULT_OFFLINE_RATES

    def test_is_idempotent(self, provider, store):
        converter = _converter(provider, store)
        converter.setup_fallback_table()
        before = store.path.read_text(encoding="utf-8")

        assert converter.setup_fallback_table() is False
        assert store.path.read_text(encoding="utf-8") == before

    def test_keeps_populated_store(self, provider, store):
        store.save(CurrencyRateTable({"EUR": 0.92}))

        assert _converter(provider, store).setup_fallback_table() is False
        assert store.load() == {"EUR": 0.92}

    def test_reseeds_empty_table(self, provider, store):
        store.path.write_text(json.dumps({"OfflineRates": {}}), encoding="utf-8")

        assert _converter(provider, store).setup_fallback_table() is True
        assert store.load() == DEFAULT_OFFLINE_RATES

    def test_replaces_unreadable_store(self, provider, store):
        store.path.write_text("{broken", encoding="utf-8")

        assert _converter(provider, store).setup_fallback_table() is True
        assert store.load() == DEFAULT_OFFLINE_RATES

    def test_replaces_store_that_is_not_utf8(self, provider, store):
        store.path.write_bytes(b"\xff\xfe garbage")

        assert _converter(provider, store).setup_fallback_table() is True
        assert store.load() == DEFAULT_OFFLINE_RATES


class TestCurrencyCodes:
    def test_explicit_codes(self, provider, store):
        converter = _converter(provider, store, base="USD", local="eur")
        assert converter.base_currency_code == "USD"
        assert converter.local_currency_code == "EUR"
