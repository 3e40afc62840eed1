# src/trolley/app.py
"""
Application Entry Point - SDK Composition Root

This module wires the SDK's services from settings: one currency converter
and the network managers for the products and basket resources. Applications
create a Trolley container once and pass its services to the code that needs
them.

Running this module (or the `trolley` console script) seeds the offline rate
table, fetches the current rate once and logs the result.

Files that USE this module:
- trolley console script (main)
- tests.test_app (unit tests)

Files that this module USES:
- trolley.shared.logging_conf (setup_logging for logging configuration)
- trolley.config (settings for configuration management)
- trolley.application.currency_converter (CurrencyConverter)
- trolley.adapters.network.manager (NetworkManager)
- trolley.adapters.providers.fixer (FixerProvider)
- trolley.adapters.persistence.rate_store (RateStore)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations for forward references

import asyncio  # Drives the asynchronous rates fetch
import logging  # Standard library for logging messages and errors
import sys  # System-specific parameters and functions for exit codes
from dataclasses import dataclass  # Service container
from typing import Optional  # Type hints for optional values

from trolley.adapters.network.manager import NetworkManager  # Per-resource HTTP access
from trolley.adapters.persistence.rate_store import RateStore  # Offline rate table storage
from trolley.adapters.providers.base import RatesProvider  # Rates provider interface
from trolley.adapters.providers.fixer import FixerProvider  # Default rates provider
from trolley.application.currency_converter import CurrencyConverter  # Price conversion
from trolley.config.settings import Settings  # Settings model
from trolley.domain.models import ConnectionTarget  # API root target
from trolley.shared.logging_conf import setup_logging  # Configure logging with file rotation

logger = logging.getLogger(__name__)

PRODUCTS_KEY = "products"
BASKET_KEY = "basket"


@dataclass
class Trolley:
    """Services owned by the application and injected into consumers."""
    settings: Settings
    target: ConnectionTarget
    converter: CurrencyConverter
    products: NetworkManager
    basket: NetworkManager


def create_app(app_settings: Optional[Settings] = None,
               provider: Optional[RatesProvider] = None) -> Trolley:
    """
    Build the service container.

    Args:
        app_settings: Settings to use (defaults to the global settings instance)
        provider: Optional rates provider (defaults to a FixerProvider from settings)

    Returns:
        Trolley container with converter and network managers
    """
    if app_settings is None:
        from trolley.config import settings as app_settings

    target = ConnectionTarget(app_settings.api_url, app_settings.connection_url)
    timeout = app_settings.http_timeout_seconds

    converter = CurrencyConverter(
        provider=provider or FixerProvider(app_settings.rates_api_url, timeout),
        store=RateStore(app_settings.offline_rates_file),
        base_currency=app_settings.base_currency,
        local_currency=app_settings.local_currency,
    )

    logger.info(
        "Trolley services ready: api=%s, connection=%s, currency %s -> %s",
        target, target.connection_url,
        converter.base_currency_code, converter.local_currency_code,
    )
    return Trolley(
        settings=app_settings,
        target=target,
        converter=converter,
        products=NetworkManager(target, PRODUCTS_KEY, timeout),
        basket=NetworkManager(target, BASKET_KEY, timeout),
    )


def main() -> int:
    """Seed offline rates, fetch the current rate once and log it."""
    from trolley.config import settings

    setup_logging(
        level=getattr(logging, settings.log_level),
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
        log_to_stdout=settings.log_stdout,
    )

    app = create_app(settings)
    app.converter.setup_fallback_table()

    error = asyncio.run(app.converter.fetch_rates())
    if error is not None:
        logger.error("Could not refresh currency rates: %s", error)
        logger.info("1 %s = %.4f %s (offline)",
                    app.converter.base_currency_code,
                    app.converter.convert(1.0),
                    app.converter.local_currency_code)
        return 1

    logger.info("1 %s = %.4f %s",
                app.converter.base_currency_code,
                app.converter.convert(1.0),
                app.converter.local_currency_code)
    return 0


if __name__ == "__main__":
    sys.exit(main())
