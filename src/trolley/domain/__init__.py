# src/trolley/domain/__init__.py
"""
Domain Layer - Pure SDK Objects

This package contains domain models and errors.
No dependencies on infrastructure or external systems.
"""

from trolley.domain.models import (
    DEFAULT_OFFLINE_RATES,
    ConnectionTarget,
    ConversionState,
    CurrencyRateTable,
    encode_segment,
)
from trolley.domain.errors import (
    InvalidRateError,
    InvalidSegmentError,
    InvalidURLError,
    MalformedResponseError,
    RatesMissingError,
    StorageCastError,
    StorageWriteError,
    TransportError,
    TrolleyError,
)

__all__ = [
    "ConnectionTarget",
    "CurrencyRateTable",
    "ConversionState",
    "DEFAULT_OFFLINE_RATES",
    "encode_segment",
    "TrolleyError",
    "InvalidSegmentError",
    "InvalidURLError",
    "TransportError",
    "MalformedResponseError",
    "RatesMissingError",
    "StorageCastError",
    "StorageWriteError",
    "InvalidRateError",
]
