# src/trolley/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains application services that orchestrate domain logic.
Adapters are injected through their interfaces.
"""

from trolley.application.currency_converter import CurrencyConverter

__all__ = [
    "CurrencyConverter",
]
