# src/trolley/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains adapters for persisting data:
- File-based storage of the offline rate table (JSON)
"""

from trolley.adapters.persistence.rate_store import OFFLINE_RATES_KEY, RateStore

__all__ = [
    "OFFLINE_RATES_KEY",
    "RateStore",
]
