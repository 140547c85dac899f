"""Pydantic models for product seeding payloads and Admin API telemetry."""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


THROTTLED_ERROR_CODE = "THROTTLED"


class ProductPublication(BaseModel):
    """Publication reference attached to a product at creation time."""

    model_config = ConfigDict(frozen=True)

    publication_id: str = Field(..., description="GID of the sales channel publication")
    publish_date: datetime


class ProductDraft(BaseModel):
    """In-memory description of one not-yet-created product."""

    model_config = ConfigDict(frozen=True)

    title: str
    description_html: str
    vendor: str
    product_type: str
    tags: tuple[str, ...] = Field(..., description="Random vocabulary tags, then the marker tag")
    status: str = "ACTIVE"
    publication: Optional[ProductPublication] = None
    image_url: str = Field(..., description="Placeholder image, attached after creation")

    def to_input(self) -> dict:
        """Convert to a ProductInput variable dict (image is attached separately)."""
        payload: dict[str, Any] = {
            "title": self.title,
            "descriptionHtml": self.description_html,
            "vendor": self.vendor,
            "productType": self.product_type,
            "tags": list(self.tags),
            "status": self.status,
        }
        if self.publication is not None:
            payload["productPublications"] = [
                {
                    "publicationId": self.publication.publication_id,
                    "publishDate": self.publication.publish_date.isoformat(),
                }
            ]
        return payload


class ThrottleStatus(BaseModel):
    """Cost and throttle figures from a response's extensions.cost block."""

    requested_cost: float = 0
    actual_cost: float = 0
    maximum_available: float = 0
    currently_available: float = 0
    restore_rate: float = 0

    @property
    def is_reported(self) -> bool:
        """Check if the server sent any budget figures at all."""
        return bool(
            self.maximum_available or self.currently_available or self.restore_rate
        )

    @classmethod
    def from_extensions(cls, extensions: object) -> "ThrottleStatus":
        """Read extensions.cost, defaulting every absent or non-numeric field to zero."""
        cost = extensions.get("cost") if isinstance(extensions, dict) else None
        if not isinstance(cost, dict):
            return cls()
        throttle = cost.get("throttleStatus")
        if not isinstance(throttle, dict):
            throttle = {}
        return cls(
            requested_cost=_safe_number(cost.get("requestedQueryCost")),
            actual_cost=_safe_number(cost.get("actualQueryCost")),
            maximum_available=_safe_number(throttle.get("maximumAvailable")),
            currently_available=_safe_number(throttle.get("currentlyAvailable")),
            restore_rate=_safe_number(throttle.get("restoreRate")),
        )


class GraphQLResponse(BaseModel):
    """Parsed GraphQL envelope: data, root-level errors and throttle telemetry."""

    data: dict = Field(default_factory=dict)
    errors: list[dict] = Field(default_factory=list)
    throttle_status: ThrottleStatus = Field(default_factory=ThrottleStatus)

    @property
    def is_throttled(self) -> bool:
        """Check if any root-level error carries the THROTTLED code."""
        for error in self.errors:
            extensions = error.get("extensions") or {}
            if isinstance(extensions, dict) and extensions.get("code") == THROTTLED_ERROR_CODE:
                return True
        return False

    @property
    def error_messages(self) -> list[str]:
        return [str(error.get("message", error)) for error in self.errors]


class BatchResult(BaseModel):
    """Outcome of one submitted draft."""

    success: bool
    index: int = Field(..., description="1-based product position within the run")
    product_id: Optional[str] = None
    title: Optional[str] = None
    image_url: Optional[str] = None


class ImageResult(BaseModel):
    """Outcome of one productCreateMedia call."""

    success: bool
    cost: float = 0


class RoundReport(BaseModel):
    """Per-round progress figures."""

    round_number: int
    width: int
    created: int = 0
    failed: int = 0
    images_attached: int = 0
    images_attempted: int = 0
    image_cost: float = 0
    throttle_status: ThrottleStatus = Field(default_factory=ThrottleStatus)


class RunTally(BaseModel):
    """Running success/failure counters for a seeding run."""

    start_time: datetime = Field(default_factory=datetime.now)
    success_count: int = 0
    failure_count: int = 0
    image_success_count: int = 0
    image_failure_count: int = 0

    def record(self, result: BatchResult) -> None:
        if result.success:
            self.success_count += 1
        else:
            self.failure_count += 1

    def record_images(self, results: list[ImageResult]) -> None:
        for result in results:
            if result.success:
                self.image_success_count += 1
            else:
                self.image_failure_count += 1

    def elapsed_seconds(self, now: Optional[datetime] = None) -> int:
        end = now or datetime.now()
        return round((end - self.start_time).total_seconds())


def _safe_number(value: object) -> float:
    """Safely convert value to float, treating missing or bad values as zero."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        return float(value)
    except (ValueError, TypeError):
        return 0
