"""Placeholder image attachment for created products."""
import asyncio
import logging

from ..schemas.products import BatchResult, ImageResult
from ..shopify.client import ShopifyGraphQLClient
from ..shopify.exceptions import ShopifyClientError
from ..shopify.graphql_strings import MUTATION_PRODUCT_CREATE_MEDIA


logger = logging.getLogger(__name__)


class ImageAttacher:
    """Attaches one placeholder image per created product via productCreateMedia."""

    def __init__(self, client: ShopifyGraphQLClient):
        self.client = client

    async def attach(self, product_id: str, image_url: str, alt_text: str) -> ImageResult:
        """Attach a single image.

        Transport failures are logged and reported as an unsuccessful,
        zero-cost result.
        """
        variables = {
            "productId": product_id,
            "media": [
                {
                    "originalSource": image_url,
                    "alt": alt_text,
                    "mediaContentType": "IMAGE",
                }
            ],
        }

        try:
            response = await self.client.execute(MUTATION_PRODUCT_CREATE_MEDIA, variables)
        except ShopifyClientError as exc:
            logger.error("Failed to add image to %s: %s", product_id, exc)
            return ImageResult(success=False, cost=0)

        cost = response.throttle_status.actual_cost

        if response.errors:
            logger.error(
                "GraphQL errors adding image to %s: %s", product_id, response.errors
            )
            return ImageResult(success=False, cost=cost)

        payload = response.data.get("productCreateMedia") or {}
        media_errors = payload.get("mediaUserErrors") or []
        if media_errors:
            logger.error("Media user errors for %s: %s", product_id, media_errors)
            return ImageResult(success=False, cost=cost)

        if not payload.get("media"):
            logger.error("No media data returned for %s", product_id)
            return ImageResult(success=False, cost=cost)

        logger.debug("Image added to %s", product_id)
        return ImageResult(success=True, cost=cost)

    async def attach_all(self, results: list[BatchResult]) -> list[ImageResult]:
        """Attach images for every successful result concurrently.

        Waits for all calls to settle; outcomes are positional with the
        successful results. An unexpected exception in one call becomes a
        failed result instead of discarding the others.
        """
        created = [result for result in results if result.success]
        if not created:
            return []

        outcomes = await asyncio.gather(
            *(
                self.attach(result.product_id, result.image_url, result.title or "")
                for result in created
            ),
            return_exceptions=True,
        )

        image_results: list[ImageResult] = []
        for result, outcome in zip(created, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(
                    "Image attachment raised for product %s: %s", result.index, outcome
                )
                image_results.append(ImageResult(success=False, cost=0))
            else:
                image_results.append(outcome)
        return image_results
