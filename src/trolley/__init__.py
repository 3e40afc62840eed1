# src/trolley/__init__.py
"""
Trolley - Client SDK for the Trolley e-commerce backend

Provides URL composition for API resources, a currency converter backed by a
remote rates service with a persisted offline fallback table, and thin network
managers for the products and basket endpoints.
"""

__version__ = "0.4.0"
__author__ = "Off-Piste"
