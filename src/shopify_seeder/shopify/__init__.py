"""Shopify Admin API integration modules."""
from .client import ShopifyGraphQLClient
from .documents import BatchDocument, build_product_create_document
from .exceptions import (
    ConfigurationError,
    ShopifyClientError,
    ShopifyGraphQLError,
    ShopifySeederError,
)

__all__ = [
    "ShopifyGraphQLClient",
    "BatchDocument",
    "build_product_create_document",
    "ShopifySeederError",
    "ShopifyClientError",
    "ShopifyGraphQLError",
    "ConfigurationError",
]
