"""Rate-aware batch submission loop for product seeding.

Turns a requested product count into rounds of aliased productCreate
mutations, reconciles per-item results, fans out image attachment, and
paces the next round against the Admin API cost budget.
"""
import asyncio
import logging
import math
from typing import Awaitable, Callable, Optional

from ..schemas.products import (
    BatchResult,
    GraphQLResponse,
    ProductDraft,
    RoundReport,
    RunTally,
    ThrottleStatus,
)
from ..shopify.client import ShopifyGraphQLClient
from ..shopify.documents import build_product_create_document
from ..shopify.exceptions import ShopifyClientError
from .fake_data import ProductDraftFactory
from .images import ImageAttacher
from .publication import PublicationResolver


logger = logging.getLogger(__name__)


def round_sizes(total: int, width: int) -> list[int]:
    """Split ``total`` drafts into ``ceil(total / width)`` rounds.

    Every round is ``width`` wide except possibly the last (the remainder).
    """
    if total < 1:
        raise ValueError(f"total must be positive, got {total}")
    if width < 1:
        raise ValueError(f"width must be positive, got {width}")

    rounds = math.ceil(total / width)
    sizes = [width] * rounds
    sizes[-1] = total - width * (rounds - 1)
    return sizes


class BatchSubmissionLoop:
    """Drives sequential rounds of product creation.

    Width 1 is the sequential path: one create call, one image call, then a
    fixed delay sized to the documented productCreate cost. Wider rounds send
    no artificial delay and instead report throttle headroom after each
    round. Throttled responses are logged but never retried.
    """

    # ~10 cost units per productCreate against a 1000/minute budget,
    # so ~100 creates per minute
    SEQUENTIAL_DELAY_SECONDS = 0.6
    MAX_BATCH_SIZE = 100

    def __init__(
        self,
        client: ShopifyGraphQLClient,
        draft_factory: ProductDraftFactory,
        image_attacher: ImageAttacher,
        publication_resolver: PublicationResolver,
        total: int,
        batch_size: int = 1,
        include_test_tag: bool = True,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        tally: Optional[RunTally] = None,
    ):
        """Initialize the loop.

        Args:
            client: API client used for productCreate documents
            draft_factory: Produces one ProductDraft per index
            image_attacher: Image stage for created products
            publication_resolver: Memoized Online Store publication lookup
            total: Number of products to create
            batch_size: Drafts per round (1 disables batching)
            include_test_tag: Add the marker tag to every draft
            sleep: Awaitable delay, injectable for tests
            tally: Existing tally to update (a fresh one by default)
        """
        if not 1 <= batch_size <= self.MAX_BATCH_SIZE:
            raise ValueError(
                f"batch_size must be between 1 and {self.MAX_BATCH_SIZE}, got {batch_size}"
            )
        if total < 1:
            raise ValueError(f"total must be positive, got {total}")

        self.client = client
        self.draft_factory = draft_factory
        self.image_attacher = image_attacher
        self.publication_resolver = publication_resolver
        self.total = total
        self.batch_size = batch_size
        self.include_test_tag = include_test_tag
        self.sleep = sleep
        self.tally = tally or RunTally()
        self.reports: list[RoundReport] = []

    @property
    def inter_round_delay(self) -> float:
        return self.SEQUENTIAL_DELAY_SECONDS if self.batch_size == 1 else 0.0

    async def run(self) -> RunTally:
        """Run every round to completion and return the tally."""
        publication_id = await self.publication_resolver.resolve()

        sizes = round_sizes(self.total, self.batch_size)
        produced = 0
        for round_number, width in enumerate(sizes, start=1):
            start_index = produced + 1
            drafts = [
                self.draft_factory.draft(
                    start_index + offset, self.include_test_tag, publication_id
                )
                for offset in range(width)
            ]

            report = await self.run_round(round_number, drafts, start_index)
            self.reports.append(report)
            produced += width

            if produced < self.total and self.inter_round_delay > 0:
                await self.sleep(self.inter_round_delay)

        return self.tally

    async def run_round(
        self, round_number: int, drafts: list[ProductDraft], start_index: int
    ) -> RoundReport:
        """Submit one round, attach images, and update the tally."""
        results, throttle_status = await self.submit(drafts, start_index)

        for result in results:
            self.tally.record(result)
            if result.success:
                logger.info(
                    "Created: %s (%s/%s)", result.title, result.index, self.total
                )

        image_results = await self.image_attacher.attach_all(results)
        self.tally.record_images(image_results)

        report = RoundReport(
            round_number=round_number,
            width=len(drafts),
            created=sum(1 for r in results if r.success),
            failed=sum(1 for r in results if not r.success),
            images_attached=sum(1 for r in image_results if r.success),
            images_attempted=len(image_results),
            image_cost=sum(r.cost for r in image_results),
            throttle_status=throttle_status,
        )
        self._log_report(report)
        return report

    async def submit(
        self, drafts: list[ProductDraft], start_index: int
    ) -> tuple[list[BatchResult], ThrottleStatus]:
        """Send one aliased productCreate document and reconcile its results.

        A transport error or any root-level error fails every slot; partial
        results inside a failed document are not recovered.
        """
        document = build_product_create_document(len(drafts))
        variables = document.bind([draft.to_input() for draft in drafts])

        try:
            response = await self.client.execute(document.render(), variables)
        except ShopifyClientError as exc:
            logger.error(
                "Failed to create products %s-%s: %s",
                start_index,
                start_index + len(drafts) - 1,
                exc,
            )
            return self._fail_all(drafts, start_index), ThrottleStatus()

        if response.errors:
            self._log_root_errors(response, drafts, start_index)
            return self._fail_all(drafts, start_index), response.throttle_status

        results = [
            self._reconcile(response, alias, draft, start_index + position)
            for position, (alias, draft) in enumerate(zip(document.aliases, drafts))
        ]
        return results, response.throttle_status

    @staticmethod
    def _reconcile(
        response: GraphQLResponse, alias: str, draft: ProductDraft, index: int
    ) -> BatchResult:
        payload = response.data.get(alias) or {}
        user_errors = payload.get("userErrors")
        product = payload.get("product") or {}

        if payload and not user_errors and product.get("id"):
            return BatchResult(
                success=True,
                index=index,
                product_id=product["id"],
                title=product.get("title") or draft.title,
                image_url=draft.image_url,
            )

        logger.error(
            "User errors for product %s: %s", index, user_errors or "No product data"
        )
        return BatchResult(success=False, index=index)

    def _log_root_errors(
        self, response: GraphQLResponse, drafts: list[ProductDraft], start_index: int
    ) -> None:
        end_index = start_index + len(drafts) - 1
        if response.is_throttled:
            throttle = response.throttle_status
            logger.warning(
                "Throttled creating products %s-%s: %.0f/%.0f cost available, "
                "restore rate %.0f/s, requested %.0f",
                start_index,
                end_index,
                throttle.currently_available,
                throttle.maximum_available,
                throttle.restore_rate,
                throttle.requested_cost,
            )
            return

        logger.error(
            "GraphQL errors for products %s-%s: %s",
            start_index,
            end_index,
            "; ".join(response.error_messages),
        )

    @staticmethod
    def _fail_all(drafts: list[ProductDraft], start_index: int) -> list[BatchResult]:
        return [
            BatchResult(success=False, index=start_index + offset)
            for offset in range(len(drafts))
        ]

    def _log_report(self, report: RoundReport) -> None:
        throttle = report.throttle_status
        logger.info(
            "Round %s: created %s/%s, images %s/%s (cost %.0f)",
            report.round_number,
            report.created,
            report.width,
            report.images_attached,
            report.images_attempted,
            report.image_cost,
        )
        if not throttle.is_reported:
            logger.info("Throttle budget: unavailable (no cost data in last response)")
            return
        logger.info(
            "Throttle budget: %.0f/%.0f available, restore rate %.0f/s",
            throttle.currently_available,
            throttle.maximum_available,
            throttle.restore_rate,
        )
