# src/trolley/application/currency_converter.py
"""
Currency Converter - Price Conversion Between Shop and Locale Currencies

This module converts prices from the shop's base currency into the user's
locale currency. The conversion rate is learned from a remote rates service;
until then (or when the service is unreachable) the persisted offline table is
used, and when that has no entry either the value is returned unchanged so
price display never fails.

A converter is meant to be created once by the composition root (trolley.app)
and passed to the code that displays prices. Its rate and table are shared
state: reads and writes go through a lock, and fetch_rates runs the blocking
HTTP request in the event loop's executor.

Files that USE this module:
- trolley.app (creates and wires the converter)
- tests.test_currency_converter (unit tests)

Files that this module USES:
- trolley.adapters.providers (RatesProvider / FixerProvider for remote rates)
- trolley.adapters.persistence.rate_store (RateStore for the offline table)
- trolley.domain.models (ConversionState, CurrencyRateTable, default table)
- trolley.shared.currency_locale (local currency resolution)
- trolley.config (settings for currency codes and storage path)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import asyncio
import logging
import threading
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional

from trolley.adapters.persistence.rate_store import RateStore
from trolley.adapters.providers.base import RatesProvider
from trolley.adapters.providers.fixer import FixerProvider
from trolley.config import settings
from trolley.domain.errors import (
    InvalidURLError,
    MalformedResponseError,
    RatesMissingError,
    StorageCastError,
    StorageWriteError,
    TransportError,
    TrolleyError,
)
from trolley.domain.models import DEFAULT_OFFLINE_RATES, ConversionState, CurrencyRateTable
from trolley.shared.currency_locale import resolve_local_currency

log = logging.getLogger(__name__)

# Money is shown with two decimal places, halves rounded up
CENTS = Decimal("0.01")

# Completion handler receiving the fetch error, or None on success
RatesCallback = Callable[[Optional[TrolleyError]], None]


class CurrencyConverter:
    """
    Converts values from the base currency to the local currency.

    Money inside baskets or products is not converted automatically; callers
    convert what they display.
    """

    def __init__(
        self,
        provider: Optional[RatesProvider] = None,
        store: Optional[RateStore] = None,
        base_currency: Optional[str] = None,
        local_currency: Optional[str] = None,
        conversion_rate: float = 0.0,
    ):
        """
        Initialize currency converter.

        Args:
            provider: Remote rates provider (defaults to FixerProvider())
            store: Offline rate table store (defaults to settings.offline_rates_file)
            base_currency: Shop currency (defaults to settings.base_currency)
            local_currency: User currency override (defaults to settings.local_currency,
                then the process locale)
            conversion_rate: Custom rate for callers that obtain rates elsewhere;
                0.0 leaves it unresolved
        """
        self.provider = provider or FixerProvider()
        self.store = store or RateStore(settings.offline_rates_file)
        self._state = ConversionState(
            base_currency_code=base_currency or settings.base_currency,
            local_currency_code=resolve_local_currency(local_currency or settings.local_currency),
            conversion_rate=float(conversion_rate),
        )
        self._lock = threading.Lock()

    @property
    def conversion_rate(self) -> float:
        """Resolved rate, 0.0 until a fetch succeeds."""
        with self._lock:
            return self._state.conversion_rate

    @property
    def base_currency_code(self) -> str:
        return self._state.base_currency_code

    @property
    def local_currency_code(self) -> str:
        return self._state.local_currency_code

    def offline_rates(self) -> CurrencyRateTable:
        """
        Read the persisted offline table.

        Returns:
            The stored table, or an empty table when nothing usable is stored
        """
        try:
            table = self.store.load()
        except StorageCastError as e:
            log.warning("Offline rates unreadable, currency rate will be set to 1.0: %s", e)
            return CurrencyRateTable()
        return table if table is not None else CurrencyRateTable()

    def _effective_rate(self) -> float:
        with self._lock:
            rate = self._state.conversion_rate
        if rate != 0.0:
            return rate
        # Not fetched yet, use the saved rate if there is one
        return self.offline_rates().get(self._state.local_currency_code, 1.0)

    def convert(self, value: float) -> float:
        """
        Convert a value from the base currency to the local currency.

        Args:
            value: Amount in the base currency

        Returns:
            Converted amount; `value` unchanged when no rate is known
        """
        return value * self._effective_rate()

    def convert_decimal(self, value: Decimal) -> Decimal:
        """
        Convert a Decimal amount, rounded half-up to two decimal places.

        Args:
            value: Amount in the base currency

        Returns:
            Converted amount quantized to cents
        """
        rate = Decimal(str(self._effective_rate()))
        return (value * rate).quantize(CENTS, rounding=ROUND_HALF_UP)

    async def fetch_rates(self, on_complete: Optional[RatesCallback] = None) -> Optional[TrolleyError]:
        """
        Fetch the rate for the local currency from the remote rates service.

        On success the fetched table replaces the offline table and the rate
        is committed. On failure the previous rate and table are kept.

        Args:
            on_complete: Called with the error, or None on success

        Returns:
            The error passed to on_complete
        """
        error = await self._download()
        if error is not None:
            log.warning("Currency rates fetch failed: %s", error)
        if on_complete is not None:
            on_complete(error)
        return error

    async def _download(self) -> Optional[TrolleyError]:
        base = self._state.base_currency_code
        local = self._state.local_currency_code

        # No need to convert from, say, GBP to GBP
        if local == base:
            log.debug("Local currency equals base currency (%s), nothing to fetch", base)
            return None

        try:
            self.provider.endpoint(base, local)
        except InvalidURLError as e:
            return e

        loop = asyncio.get_running_loop()
        try:
            data = await loop.run_in_executor(None, self.provider.latest, base, local)
        except (InvalidURLError, TransportError, MalformedResponseError) as e:
            return e

        rates = data.get("rates")
        if not isinstance(rates, dict):
            return RatesMissingError(data)

        fetched = CurrencyRateTable.from_raw(rates)
        rate = fetched.get(local)
        if rate is None:
            rate = self.offline_rates().get(local)
            if rate is None:
                return RatesMissingError({})
            log.info("Fetched rates lack %s, using offline rate %s", local, rate)

        with self._lock:
            if fetched:
                try:
                    self.store.save(fetched)
                except StorageWriteError as e:
                    log.error("Could not persist fetched rates, keeping them in memory only: %s", e)
            self._state.conversion_rate = rate

        log.info("Conversion rate %s -> %s set to %s", base, local, rate)
        return None

    def setup_fallback_table(self) -> bool:
        """
        Seed the store with the bundled table unless a non-empty table is stored.

        Returns:
            True if the bundled table was written, False otherwise
        """
        with self._lock:
            try:
                table = self.store.load()
            except StorageCastError as e:
                log.warning("Replacing unreadable offline rates with bundled table: %s", e)
                table = None

            if table:
                log.debug("Offline rates already present (%d currencies)", len(table))
                return False

            try:
                self.store.save(CurrencyRateTable(DEFAULT_OFFLINE_RATES))
            except StorageWriteError as e:
                log.error("Could not seed offline rates: %s", e)
                return False

        log.info("Seeded offline rates with %d bundled currencies", len(DEFAULT_OFFLINE_RATES))
        return True
