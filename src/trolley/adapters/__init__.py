# src/trolley/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (rates API)
- Network (Trolley backend endpoints)
- Persistence (storage)
"""

__all__ = []
