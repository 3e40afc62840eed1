# src/trolley/shared/currency_locale.py
"""
Locale Currency - Local Currency Detection

This module derives the user's currency code from the active process locale.
The locale is whatever the embedding application configured with
locale.setlocale(); the plain "C" locale carries no currency and yields the
default code.

Files that USE this module:
- trolley.application.currency_converter (resolves the local currency code)

Files that this module USES:
- trolley.shared.validators (currency code validation)
"""
import locale
import logging
from typing import Optional

from trolley.shared.validators import normalize_currency_code, validate_currency_code

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_CURRENCY = "GBP"


def locale_currency_code(default: str = DEFAULT_LOCAL_CURRENCY) -> str:
    """
    Get the ISO 4217 code of the active locale's currency.
    
    Args:
        default: Code returned when the locale has no usable currency
        
    Returns:
        Three-letter currency code
    """
    try:
        # int_curr_symbol is the code followed by a separator, e.g. "EUR "
        raw = locale.localeconv().get("int_curr_symbol", "")
    except (ValueError, locale.Error) as e:
        logger.warning("Could not read locale conventions, using %s: %s", default, e)
        return default
    
    code = normalize_currency_code(raw or "")[:3]
    if not validate_currency_code(code):
        logger.debug("Locale has no currency code (%r), using %s", raw, default)
        return default
    return code


def resolve_local_currency(override: Optional[str] = None,
                           default: str = DEFAULT_LOCAL_CURRENCY) -> str:
    """
    Resolve the local currency: explicit override first, then the locale.
    
    Args:
        override: Configured currency code (e.g. from TROLLEY_LOCAL_CURRENCY)
        default: Fallback when neither override nor locale give a code
        
    Returns:
        Three-letter currency code
    """
    if override:
        code = normalize_currency_code(override)
        if validate_currency_code(code):
            return code
        logger.warning("Ignoring invalid local currency override %r", override)
    return locale_currency_code(default)
