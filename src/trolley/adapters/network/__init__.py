# src/trolley/adapters/network/__init__.py
"""
Network Adapters - Trolley Backend Access

This package contains the per-resource network managers.
"""

from trolley.adapters.network.manager import NetworkManager, route_segments

__all__ = [
    "NetworkManager",
    "route_segments",
]
