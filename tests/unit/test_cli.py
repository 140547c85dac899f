"""Unit tests for the command-line surface."""
from unittest.mock import AsyncMock, patch

import pytest

from src.shopify_seeder.cli import (
    DEFAULT_BATCH_SIZE,
    build_parser,
    main,
    resolve_batch_size,
    seed,
)
from src.shopify_seeder.config import SeederSettings
from src.shopify_seeder.schemas.products import RunTally
from src.shopify_seeder.shopify.client import ShopifyGraphQLClient
from src.shopify_seeder.shopify.exceptions import ConfigurationError


def test_defaults():
    args = build_parser().parse_args([])

    assert args.count == 100
    assert args.include_test_tag is True
    assert resolve_batch_size(args) == 1


def test_batch_flag_uses_default_width():
    args = build_parser().parse_args(["50", "--batch", "--no-test-tag"])

    assert args.count == 50
    assert args.include_test_tag is False
    assert resolve_batch_size(args) == DEFAULT_BATCH_SIZE


def test_batch_size_implies_batching():
    args = build_parser().parse_args(["50", "--batch-size", "25"])

    assert resolve_batch_size(args) == 25


@pytest.mark.parametrize("count", ["0", "-3", "abc", "2.5"])
def test_invalid_count_exits_nonzero(count, capsys):
    with pytest.raises(SystemExit) as exc_info:
        build_parser().parse_args(["--", count])

    assert exc_info.value.code != 0
    assert "positive integer" in capsys.readouterr().err


@pytest.mark.parametrize("size", ["0", "101", "ten"])
def test_invalid_batch_size_exits_nonzero(size, capsys):
    with pytest.raises(SystemExit) as exc_info:
        build_parser().parse_args(["10", "--batch-size", size])

    assert exc_info.value.code != 0
    assert "between 1 and 100" in capsys.readouterr().err


def test_help_exits_zero(capsys):
    with pytest.raises(SystemExit) as exc_info:
        build_parser().parse_args(["--help"])

    assert exc_info.value.code == 0
    assert "--batch-size" in capsys.readouterr().out


def test_missing_configuration_exits_one(capsys):
    with patch(
        "src.shopify_seeder.cli.load_settings",
        side_effect=ConfigurationError(["SHOPIFY_STORE_DOMAIN (or SHOP)"]),
    ), patch("src.shopify_seeder.cli.seed", new_callable=AsyncMock) as mock_seed:
        exit_code = main(["5"])

    assert exit_code == 1
    assert "SHOPIFY_STORE_DOMAIN" in capsys.readouterr().err
    mock_seed.assert_not_called()


def test_failed_products_still_exit_zero(capsys):
    settings = SeederSettings(shop_domain="dev.myshopify.com", access_token="shpat_x")
    tally = RunTally(success_count=3, failure_count=2)

    with patch("src.shopify_seeder.cli.load_settings", return_value=settings), patch(
        "src.shopify_seeder.cli.seed", new_callable=AsyncMock, return_value=tally
    ) as mock_seed:
        exit_code = main(["5", "--batch-size", "5"])

    assert exit_code == 0
    mock_seed.assert_awaited_once_with(settings, 5, 5, True)
    out = capsys.readouterr().out
    assert "Success: 3, Failed: 2" in out
    assert "2 products failed to create" in out
    assert "shpat_x" not in out


@pytest.mark.asyncio
async def test_seed_session_uses_client_request_timeout():
    settings = SeederSettings(shop_domain="dev.myshopify.com", access_token="shpat_x")
    tally = RunTally(success_count=1)

    with patch("src.shopify_seeder.cli.aiohttp.ClientSession") as mock_session_cls, patch(
        "src.shopify_seeder.cli.BatchSubmissionLoop"
    ) as mock_loop_cls:
        mock_loop_cls.return_value.run = AsyncMock(return_value=tally)
        result = await seed(settings, 1, 1, True)

    assert result is tally
    timeout = mock_session_cls.call_args.kwargs["timeout"]
    assert timeout.total == ShopifyGraphQLClient.REQUEST_TIMEOUT_SECONDS
    assert timeout.connect == ShopifyGraphQLClient.CONNECT_TIMEOUT_SECONDS
