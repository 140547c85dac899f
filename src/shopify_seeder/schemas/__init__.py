"""Pydantic models shared across the seeder."""
from .products import (
    BatchResult,
    GraphQLResponse,
    ImageResult,
    ProductDraft,
    ProductPublication,
    RoundReport,
    RunTally,
    ThrottleStatus,
)

__all__ = [
    "BatchResult",
    "GraphQLResponse",
    "ImageResult",
    "ProductDraft",
    "ProductPublication",
    "RoundReport",
    "RunTally",
    "ThrottleStatus",
]
