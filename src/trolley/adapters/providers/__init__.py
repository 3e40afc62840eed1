# src/trolley/adapters/providers/__init__.py
"""
Provider Adapters - External API Clients

This package contains adapters for external currency rate APIs.
All providers implement the RatesProvider interface.
"""

from trolley.adapters.providers.base import RatesProvider
from trolley.adapters.providers.fixer import FixerProvider

__all__ = [
    "RatesProvider",
    "FixerProvider",
]
