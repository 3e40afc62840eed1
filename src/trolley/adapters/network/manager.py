# src/trolley/adapters/network/manager.py
"""
Network Manager - HTTP Access to Trolley Backend Resources

This module forwards HTTP GET requests to one resource of the Trolley backend
(for example "products" or "basket"). Each manager owns a ConnectionTarget for
its resource; routes and items are appended as encoded path segments.

Files that USE this module:
- trolley.app (creates the products and basket managers)
- tests.test_network_manager (unit tests)

Files that this module USES:
- trolley.domain.models (ConnectionTarget for endpoint composition)
- trolley.domain.errors (TransportError, MalformedResponseError)
- trolley.config (settings for HTTP timeout)
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import requests

from trolley.config import settings
from trolley.domain.errors import MalformedResponseError, TransportError
from trolley.domain.models import ConnectionTarget

log = logging.getLogger(__name__)


def route_segments(*routes: str) -> list[str]:
    """Split "/"-separated routes into path segments, ignoring empty parts."""
    segments = []
    for route in routes:
        segments.extend(part for part in route.split("/") if part)
    return segments


class NetworkManager:
    """GET access to a single backend resource."""

    def __init__(self, target: ConnectionTarget, key: str, timeout: Optional[int] = None):
        """
        Initialize network manager.

        Args:
            target: API root target (shared between managers; never mutated)
            key: Resource name appended to the target, e.g. "products"
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)

        Raises:
            InvalidSegmentError: If key is not a valid path segment
        """
        self.target = target.adding_path(key)
        self.key = key
        self.timeout = timeout or settings.http_timeout_seconds

    def __str__(self) -> str:
        return self.target.description

    def url_for(self, route: str = "") -> ConnectionTarget:
        """
        Target for a route under this resource.

        Raises:
            InvalidSegmentError: If a route segment cannot be encoded
        """
        return self.target.adding_paths(*route_segments(route))

    def get(
        self,
        route: str = "",
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> requests.Response:
        """
        Issue a GET request for a route under this resource.

        Args:
            route: "/"-separated route below the resource (may be empty)
            params: Optional query parameters
            headers: Optional request headers

        Returns:
            The successful response

        Raises:
            InvalidSegmentError: If the route cannot be encoded
            TransportError: On connection errors, timeouts and non-2xx statuses
        """
        return self._request(self.url_for(route), params, headers)

    def get_item(
        self,
        item: str,
        route: str = "",
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> requests.Response:
        """GET a single item inside a route, i.e. `<resource>/<route>/<item>`."""
        return self._request(self.url_for(route).adding_path(item), params, headers)

    def _request(
        self,
        target: ConnectionTarget,
        params: Optional[Mapping[str, Any]],
        headers: Optional[Mapping[str, str]],
    ) -> requests.Response:
        url = target.connection_url
        try:
            log.debug("GET %s params=%s", url, params)
            resp = requests.get(url, params=params, headers=headers, timeout=self.timeout)
            resp.raise_for_status()
        except requests.exceptions.Timeout as e:
            log.warning("%s request timeout after %d seconds", self.key, self.timeout)
            raise TransportError(e) from e
        except requests.exceptions.RequestException as e:
            log.warning("%s request failed: %s", self.key, e)
            raise TransportError(e) from e
        return resp

    def get_json(
        self,
        route: str = "",
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """
        GET a route and decode the JSON body.

        Raises:
            MalformedResponseError: If the body is not valid JSON
        """
        resp = self.get(route, params=params, headers=headers)
        try:
            return resp.json()
        except ValueError as e:
            log.error("%s returned invalid JSON: %s", self.key, e)
            raise MalformedResponseError(f"{self.key} returned invalid JSON: {e}") from e
