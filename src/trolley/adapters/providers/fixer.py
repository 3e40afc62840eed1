# src/trolley/adapters/providers/fixer.py
"""
Fixer-style Rates Provider

This module implements the client for a Fixer-compatible rates service:
GET {scheme}://{host}/latest?base=GBP&symbols=EUR answering
{"base": "GBP", "rates": {"EUR": 1.16}, ...}. It performs exactly one request
per call (no caching, no retries) and maps every failure to a domain error.

Files that USE this module:
- trolley.application.currency_converter (default provider for fetch_rates)
- trolley.app (creates the provider from settings)
- tests.test_providers (unit tests)

Files that this module USES:
- trolley.adapters.providers.base (RatesProvider interface)
- trolley.config (settings for API URL and timeout)
- trolley.domain.models (ConnectionTarget builds the endpoint)
"""
import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import requests

from trolley.adapters.providers.base import RatesProvider
from trolley.config import settings
from trolley.domain.errors import MalformedResponseError, TransportError
from trolley.domain.models import ConnectionTarget

log = logging.getLogger(__name__)


class FixerProvider(RatesProvider):
    """Client for the 'latest' endpoint of a Fixer-compatible rates API."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[int] = None):
        """
        Initialize rates provider.
        
        Args:
            base_url: Optional API root (defaults to settings.rates_api_url)
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
        """
        self.base_url = base_url or settings.rates_api_url
        self.timeout = timeout or settings.http_timeout_seconds

    def endpoint(self, base: str, symbols: str) -> str:
        """
        Build the 'latest' endpoint URL.
        
        Args:
            base: Base currency code
            symbols: Currency code(s) to request
            
        Returns:
            Absolute URL with query string
            
        Raises:
            InvalidURLError: If the configured API root is not an absolute http(s) URL
        """
        target = ConnectionTarget(self.base_url).adding_path("latest")
        return f"{target.resolved_url}?{urlencode({'base': base, 'symbols': symbols})}"

    def latest(self, base: str, symbols: str) -> Dict[str, Any]:
        """
        Fetch the latest rates document.
        
        Args:
            base: Base currency code
            symbols: Currency code(s) to request
            
        Returns:
            Decoded JSON object
            
        Raises:
            InvalidURLError: If the endpoint cannot be built
            TransportError: On connection errors, timeouts and non-2xx statuses
            MalformedResponseError: If the body is not a JSON object
        """
        url = self.endpoint(base, symbols)
        try:
            log.info("Fetching %s rates for %s", base, symbols)
            resp = requests.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.exceptions.Timeout as e:
            log.warning("Rates API timeout after %d seconds", self.timeout)
            raise TransportError(e) from e
        except requests.exceptions.RequestException as e:
            log.warning("Rates API request failed: %s", e)
            raise TransportError(e) from e

        try:
            data = resp.json()
        except ValueError as e:
            log.error("Rates API returned invalid JSON: %s", e)
            raise MalformedResponseError(f"Rates API returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            log.error("Rates API unexpected response type: %r", type(data))
            raise MalformedResponseError("Rates API returned non-object JSON")
        return data
