"""Seed a Shopify development store with synthetic products."""

__version__ = "0.1.0"
