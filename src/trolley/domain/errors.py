# src/trolley/domain/errors.py
"""
Domain Errors - SDK Exceptions

This module defines the exceptions raised or reported by the SDK. All of them
are recoverable: URL composition raises so callers can decide whether to abort,
rate fetching reports them through its return value and completion callback.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional


class TrolleyError(Exception):
    """Base exception for all SDK errors."""
    pass


class InvalidSegmentError(TrolleyError):
    """Raised when a path segment cannot be encoded into a URL path component."""

    def __init__(self, segment: Any, reason: str):
        self.segment = segment
        self.reason = reason
        super().__init__(f"Invalid path segment {segment!r}: {reason}")


class InvalidURLError(TrolleyError):
    """Raised when a base URL or a composed endpoint is not an absolute http(s) URL."""

    def __init__(self, url: Any):
        self.url = url
        super().__init__(f"Invalid URL {url!r}")


class TransportError(TrolleyError):
    """Raised when an HTTP request fails (connection, timeout or error status)."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Transport error: {cause}")


class MalformedResponseError(TrolleyError):
    """Raised when a response body is not the expected JSON object."""
    pass


class RatesMissingError(TrolleyError):
    """Raised when a rates payload carries no usable rate for the local currency."""

    def __init__(self, payload: Optional[Mapping[str, Any]] = None):
        self.payload = dict(payload or {})
        super().__init__(f"Invalid JSON {self.payload}")


class StorageCastError(TrolleyError):
    """Raised when persisted data exists but is not in the expected shape."""
    pass


class InvalidRateError(TrolleyError):
    """Raised when a rate table entry has a bad currency code or a non-positive rate."""
    pass


class StorageWriteError(TrolleyError):
    """Raised when the rate table cannot be written to durable storage."""
    pass
