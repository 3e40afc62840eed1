# src/trolley/domain/models.py
"""
Domain Models - Connection Targets and Currency Data

This module contains the domain models of the SDK:
- ConnectionTarget: base URL plus percent-encoded path segments (URL composer)
- CurrencyRateTable: validated mapping of ISO currency code to rate
- ConversionState: base/local currency pair and the resolved conversion rate

Files that USE this module:
- trolley.application.currency_converter (rate table and conversion state)
- trolley.adapters.network.manager (builds endpoints with ConnectionTarget)
- trolley.adapters.providers.fixer (builds the rates endpoint)
- trolley.adapters.persistence.rate_store (loads and saves rate tables)
- tests.* (tests use domain models directly)

Files that this module USES:
- trolley.domain.errors (InvalidSegmentError, InvalidURLError, InvalidRateError)
- trolley.shared.validators (currency code, rate and URL validation)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple
from urllib.parse import quote, urlsplit, urlunsplit

from trolley.domain.errors import InvalidRateError, InvalidSegmentError, InvalidURLError
from trolley.shared.validators import validate_currency_code, validate_http_url, validate_rate

log = logging.getLogger(__name__)

LOCALHOST = "localhost"
LOOPBACK_IP = "127.0.0.1"


def encode_segment(segment: Any) -> str:
    """
    Percent-encode a single path segment.

    Every reserved character (including "/") is encoded, unreserved characters
    are kept as-is.

    Args:
        segment: Raw path segment

    Returns:
        Encoded segment

    Raises:
        InvalidSegmentError: If the segment cannot be represented as a path component
    """
    if not isinstance(segment, str):
        raise InvalidSegmentError(segment, "segment must be a string")
    if not segment:
        raise InvalidSegmentError(segment, "segment is empty")
    if segment in (".", ".."):
        raise InvalidSegmentError(segment, "dot segments are not allowed")
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in segment):
        raise InvalidSegmentError(segment, "segment contains control characters")
    try:
        return quote(segment, safe="", encoding="utf-8", errors="strict")
    except UnicodeEncodeError as e:
        raise InvalidSegmentError(segment, f"segment is not encodable as UTF-8: {e}") from e


def _loopback_root(base_url: str) -> str:
    """Rewrite a localhost root to the loopback IP; other hosts are returned unchanged."""
    parts = urlsplit(base_url)
    if parts.hostname != LOCALHOST:
        return base_url
    netloc = LOOPBACK_IP if parts.port is None else f"{LOOPBACK_IP}:{parts.port}"
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))


def _check_root(url: Any) -> str:
    if not validate_http_url(url):
        raise InvalidURLError(url)
    parts = urlsplit(url)
    if parts.query or parts.fragment:
        raise InvalidURLError(url)
    return url


def _join(root: str, encoded_path: Tuple[str, ...]) -> str:
    if not encoded_path:
        return root
    return root.rstrip("/") + "/" + "/".join(encoded_path)


@dataclass
class ConnectionTarget:
    """
    A connection target: API root plus an ordered list of path segments.

    Attributes:
        base_url: Absolute http(s) URL of the API root
        connection_base_url: Root used for the actual connection; derived from
            base_url (localhost rewritten to 127.0.0.1) when not given
        path: Raw (unencoded) path segments, in order
    """
    base_url: str
    connection_base_url: Optional[str] = None
    path: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        _check_root(self.base_url)
        if self.connection_base_url is None:
            self.connection_base_url = _loopback_root(self.base_url)
        else:
            _check_root(self.connection_base_url)
        self.path = tuple(self.path)
        # Validates segments passed to the constructor
        self._encoded_path()

    def _encoded_path(self) -> Tuple[str, ...]:
        return tuple(encode_segment(s) for s in self.path)

    def adding_path(self, segment: str) -> ConnectionTarget:
        """
        Return a new target with `segment` appended; this target is untouched.

        Raises:
            InvalidSegmentError: If the segment cannot be encoded
        """
        encode_segment(segment)
        return ConnectionTarget(
            base_url=self.base_url,
            connection_base_url=self.connection_base_url,
            path=self.path + (segment,),
        )

    def adding_paths(self, *segments: str) -> ConnectionTarget:
        """Return a new target with every segment appended in order."""
        target = self
        for segment in segments:
            target = target.adding_path(segment)
        return target

    def add_path(self, segment: str) -> None:
        """
        Append `segment` to this target in place.

        Every holder of a reference to this target sees the change, prefer
        adding_path() unless the caller owns the target exclusively.

        Raises:
            InvalidSegmentError: If the segment cannot be encoded (target unchanged)
        """
        log.warning(
            "Adding a path to a shared ConnectionTarget in place (%s + %r), "
            "make sure no other holder depends on it",
            self, segment,
        )
        encode_segment(segment)
        self.path = self.path + (segment,)

    @property
    def resolved_url(self) -> str:
        """Absolute URL: base URL followed by the encoded path."""
        return _join(self.base_url, self._encoded_path())

    # Alias matching the `url` accessor of other HTTP clients
    url = resolved_url

    @property
    def connection_url(self) -> str:
        """URL for the actual network connection, same path over the connection root."""
        return _join(self.connection_base_url, self._encoded_path())

    @property
    def description(self) -> str:
        return self.resolved_url

    def __str__(self) -> str:
        return self.resolved_url


class CurrencyRateTable(Mapping):
    """
    Immutable mapping of ISO 4217 currency code to a strictly positive rate.

    Rates are units of the keyed currency per one unit of the shop's base
    currency.
    """

    def __init__(self, rates: Optional[Mapping[str, Any]] = None):
        """
        Build a validated rate table.

        Args:
            rates: Mapping of currency code to rate

        Raises:
            InvalidRateError: If any key is not an ISO code or any value is not positive
        """
        checked: Dict[str, float] = {}
        for code, rate in (rates or {}).items():
            if not validate_currency_code(code):
                raise InvalidRateError(f"Invalid currency code: {code!r}")
            if not validate_rate(rate):
                raise InvalidRateError(f"Invalid rate for {code}: {rate!r}")
            checked[code] = float(rate)
        self._rates = checked

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> CurrencyRateTable:
        """
        Build a table from untrusted data, dropping invalid entries.

        Args:
            raw: Mapping as decoded from JSON (remote response or storage)

        Returns:
            CurrencyRateTable containing only the valid entries
        """
        valid = {}
        for code, rate in raw.items():
            if validate_currency_code(code) and validate_rate(rate):
                valid[code] = rate
            else:
                log.warning("Dropping invalid rate entry %r=%r", code, rate)
        return cls(valid)

    def __getitem__(self, code: str) -> float:
        return self._rates[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rates)

    def __len__(self) -> int:
        return len(self._rates)

    def to_json(self) -> Dict[str, float]:
        """Return a JSON-serializable copy of the table."""
        return dict(self._rates)

    def __repr__(self) -> str:
        return f"CurrencyRateTable({self._rates!r})"


@dataclass
class ConversionState:
    """
    Currency pair and resolved rate used for conversions.

    Attributes:
        base_currency_code: The shop's currency
        local_currency_code: The user's (locale) currency
        conversion_rate: Resolved rate; 0.0 means not yet resolved
    """
    base_currency_code: str
    local_currency_code: str
    conversion_rate: float = 0.0

    @property
    def is_resolved(self) -> bool:
        return self.conversion_rate != 0.0

    @property
    def needs_conversion(self) -> bool:
        return self.base_currency_code != self.local_currency_code


# Bundled fallback table (GBP base) used until a table is fetched and persisted
DEFAULT_OFFLINE_RATES: Dict[str, float] = {
    "AUD": 1.6231,
    "BGN": 2.2694,
    "BRL": 3.8936,
    "CAD": 1.6616,
    "CHF": 1.2414,
    "CNY": 8.5835,
    "CZK": 31.355,
    "DKK": 8.6315,
    "EUR": 1.1604,
    "HKD": 9.6832,
    "HRK": 8.6424,
    "HUF": 358.96,
    "IDR": 16590.0,
    "ILS": 4.5154,
    "INR": 80.867,
    "JPY": 138.54,
    "KRW": 1391.4,
    "MXN": 23.35,
    "MYR": 5.5074,
    "NOK": 10.64,
    "NZD": 1.7758,
    "PHP": 62.503,
    "PLN": 4.9006,
    "RON": 5.2736,
    "RUB": 70.014,
    "SEK": 11.096,
    "SGD": 1.7379,
    "THB": 42.877,
    "TRY": 4.5392,
    "USD": 1.2459,
    "ZAR": 16.032,
}
