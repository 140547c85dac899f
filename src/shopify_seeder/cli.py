"""Command-line entry point for seeding a Shopify store with synthetic products.

Usage:
    shopify-seed                      # 100 products with the test_product tag
    shopify-seed 50                   # 50 products
    shopify-seed 200 --no-test-tag    # 200 products without the marker tag
    shopify-seed 500 --batch          # 500 products, 10 per request
    shopify-seed 500 --batch-size 25  # 500 products, 25 per request
"""
import argparse
import asyncio
import logging
import sys
from typing import Optional

import aiohttp

from .config import SeederSettings, load_settings
from .schemas.products import RunTally
from .seeding.batch_loop import BatchSubmissionLoop
from .seeding.fake_data import MARKER_TAG, ProductDraftFactory
from .seeding.images import ImageAttacher
from .seeding.publication import PublicationResolver
from .shopify.client import ShopifyGraphQLClient
from .shopify.exceptions import ConfigurationError


DEFAULT_COUNT = 100
DEFAULT_BATCH_SIZE = 10
SEPARATOR = "─" * 50


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Product count must be a positive integer, got {value!r}"
        )
    if number <= 0:
        raise argparse.ArgumentTypeError(
            f"Product count must be a positive integer, got {value!r}"
        )
    return number


def batch_size_type(value: str) -> int:
    limit = BatchSubmissionLoop.MAX_BATCH_SIZE
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Batch size must be an integer between 1 and {limit}, got {value!r}"
        )
    if not 1 <= number <= limit:
        raise argparse.ArgumentTypeError(
            f"Batch size must be an integer between 1 and {limit}, got {value!r}"
        )
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shopify-seed",
        description="Populate a Shopify development store with synthetic products",
    )
    parser.add_argument(
        "count",
        nargs="?",
        type=positive_int,
        default=DEFAULT_COUNT,
        help=f"Number of products to generate (default: {DEFAULT_COUNT})",
    )
    parser.add_argument(
        "--no-test-tag",
        dest="include_test_tag",
        action="store_false",
        help=f"Don't add the '{MARKER_TAG}' tag used for easy cleanup",
    )
    parser.add_argument(
        "--batch",
        action="store_true",
        help=f"Create products in batches (default size {DEFAULT_BATCH_SIZE})",
    )
    parser.add_argument(
        "--batch-size",
        type=batch_size_type,
        help="Products per batched request, 1-100 (implies --batch)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def resolve_batch_size(args: argparse.Namespace) -> int:
    """Return the round width: 1 unless batching was requested."""
    if args.batch_size is not None:
        return args.batch_size
    if args.batch:
        return DEFAULT_BATCH_SIZE
    return 1


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


async def seed(
    settings: SeederSettings,
    count: int,
    batch_size: int,
    include_test_tag: bool,
) -> RunTally:
    """Open a session and run the batch submission loop."""
    timeout = aiohttp.ClientTimeout(
        total=ShopifyGraphQLClient.REQUEST_TIMEOUT_SECONDS,
        connect=ShopifyGraphQLClient.CONNECT_TIMEOUT_SECONDS,
    )
    async with aiohttp.ClientSession(timeout=timeout) as session:
        client = ShopifyGraphQLClient(
            shop_domain=settings.shop_domain,
            access_token=settings.access_token,
            api_version=settings.api_version,
            session=session,
        )
        loop = BatchSubmissionLoop(
            client=client,
            draft_factory=ProductDraftFactory(),
            image_attacher=ImageAttacher(client),
            publication_resolver=PublicationResolver(client),
            total=count,
            batch_size=batch_size,
            include_test_tag=include_test_tag,
        )
        return await loop.run()


def print_summary(tally: RunTally) -> None:
    print(SEPARATOR)
    print(f"Completed in {tally.elapsed_seconds()}s")
    print(f"Success: {tally.success_count}, Failed: {tally.failure_count}")
    print(
        f"Images: {tally.image_success_count} attached, "
        f"{tally.image_failure_count} failed"
    )
    if tally.failure_count > 0:
        print(f"{tally.failure_count} products failed to create. Check errors above.")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point. Exit status reflects startup errors only."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    batch_size = resolve_batch_size(args)

    print(f"Starting generation of {args.count} products...")
    print(f"Store: {settings.shop_domain}")
    print(f"API version: {settings.api_version}")
    print(f"Test tag: {'included' if args.include_test_tag else 'disabled'}")
    if batch_size > 1:
        print(f"Batching: enabled ({batch_size} per request)")
    else:
        print("Batching: disabled")
    print(SEPARATOR)

    tally = asyncio.run(
        seed(settings, args.count, batch_size, args.include_test_tag)
    )
    print_summary(tally)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
