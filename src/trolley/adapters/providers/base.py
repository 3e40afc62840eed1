# src/trolley/adapters/providers/base.py
"""
Base Provider Interface for Currency Rate Providers

This module defines the abstract base class for remote rate providers.
It establishes the contract that all provider implementations must follow.

Files that USE this module:
- trolley.adapters.providers.fixer (FixerProvider implements RatesProvider)
- trolley.application.currency_converter (depends on the RatesProvider interface)

Files that this module USES:
- None (pure interface definition)
"""
from abc import ABC, abstractmethod
from typing import Any, Dict


class RatesProvider(ABC):
    @abstractmethod
    def endpoint(self, base: str, symbols: str) -> str:
        """Return the absolute URL queried for `base` -> `symbols` rates."""
        raise NotImplementedError

    @abstractmethod
    def latest(self, base: str, symbols: str) -> Dict[str, Any]:
        """Fetch the latest rates document (a JSON object with a "rates" field)."""
        raise NotImplementedError
