# src/trolley/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Locale currency detection
- Logging configuration
"""

from trolley.shared.validators import (
    normalize_currency_code,
    validate_currency_code,
    validate_http_url,
    validate_rate,
)
from trolley.shared.currency_locale import (
    DEFAULT_LOCAL_CURRENCY,
    locale_currency_code,
    resolve_local_currency,
)

__all__ = [
    "validate_currency_code",
    "validate_rate",
    "validate_http_url",
    "normalize_currency_code",
    "DEFAULT_LOCAL_CURRENCY",
    "locale_currency_code",
    "resolve_local_currency",
]
