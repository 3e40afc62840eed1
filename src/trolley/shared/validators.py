# src/trolley/shared/validators.py
"""
Input Validation Utilities - Configuration and Data Validation

This module provides validation functions for currency codes, rate values and
URLs. They are used both by the settings layer (field validators) and by the
domain models to enforce the rate table and connection target invariants.

Files that USE this module:
- trolley.config.settings (uses validation functions in Settings field validators)
- trolley.domain.models (rate table and connection target invariants)
- trolley.shared.currency_locale (checks the locale currency code)

Files that this module USES:
- None (pure utility functions)
"""
import math
import re
from typing import Any
from urllib.parse import urlsplit

_CURRENCY_CODE_RE = re.compile(r"^[A-Z]{3}$")


def validate_currency_code(code: Any) -> bool:
    """
    Validate ISO 4217 currency code format.
    
    Args:
        code: Currency code to validate (e.g., "GBP")
        
    Returns:
        True if the code is exactly three uppercase ASCII letters, False otherwise
    """
    if not isinstance(code, str):
        return False
    return bool(_CURRENCY_CODE_RE.match(code))


def validate_rate(value: Any) -> bool:
    """
    Validate a conversion rate value.
    
    Args:
        value: Rate to validate
        
    Returns:
        True if value is a finite, strictly positive number, False otherwise
    """
    # bool is an int subclass but never a rate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def validate_http_url(url: Any) -> bool:
    """
    Validate that a URL is absolute and uses http or https.
    
    Args:
        url: URL to validate
        
    Returns:
        True if valid, False otherwise
    """
    if not isinstance(url, str) or not url or url != url.strip():
        return False
    try:
        parts = urlsplit(url)
        # Accessing port raises ValueError for out of range or non-numeric ports
        parts.port
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.hostname)


def normalize_currency_code(code: str) -> str:
    """
    Normalize user-supplied currency code (strip whitespace, uppercase).
    
    Args:
        code: Raw currency code
        
    Returns:
        Normalized code (not validated)
    """
    return code.strip().upper()
