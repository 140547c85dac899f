"""Unit tests for the image attachment stage."""
import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from src.shopify_seeder.schemas.products import (
    BatchResult,
    GraphQLResponse,
    ImageResult,
    ThrottleStatus,
)
from src.shopify_seeder.seeding.images import ImageAttacher
from src.shopify_seeder.shopify.exceptions import ShopifyClientError


def _media_response(errors=None, cost=None) -> GraphQLResponse:
    return GraphQLResponse(
        data={
            "productCreateMedia": {
                "media": [{"id": "gid://shopify/MediaImage/1"}],
                "mediaUserErrors": errors or [],
            }
        },
        throttle_status=ThrottleStatus(actual_cost=cost or 0),
    )


def _created(index: int) -> BatchResult:
    return BatchResult(
        success=True,
        index=index,
        product_id=f"gid://shopify/Product/{index}",
        title=f"Product {index}",
        image_url=f"https://picsum.photos/seed/seed{index}/400/400.jpg",
    )


@pytest.mark.asyncio
async def test_attach_success_reports_cost():
    client = AsyncMock()
    client.execute.return_value = _media_response(cost=10)
    attacher = ImageAttacher(client)

    result = await attacher.attach(
        "gid://shopify/Product/1", "https://picsum.photos/seed/x/400/400.jpg", "Hat"
    )

    assert result == ImageResult(success=True, cost=10)
    _, variables = client.execute.call_args.args
    assert variables["productId"] == "gid://shopify/Product/1"
    assert variables["media"] == [
        {
            "originalSource": "https://picsum.photos/seed/x/400/400.jpg",
            "alt": "Hat",
            "mediaContentType": "IMAGE",
        }
    ]


@pytest.mark.asyncio
async def test_attach_media_user_errors_fail():
    client = AsyncMock()
    client.execute.return_value = _media_response(
        errors=[{"field": ["media"], "message": "Invalid image URL"}], cost=10
    )

    result = await ImageAttacher(client).attach("gid://shopify/Product/1", "u", "t")

    assert result == ImageResult(success=False, cost=10)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "data",
    [
        {"productCreateMedia": None},
        {},
        {"productCreateMedia": {"media": [], "mediaUserErrors": []}},
    ],
)
async def test_attach_without_media_payload_fails(data, caplog):
    """Test a response with no created media is not counted as attached."""
    client = AsyncMock()
    client.execute.return_value = GraphQLResponse(
        data=data, throttle_status=ThrottleStatus(actual_cost=10)
    )

    result = await ImageAttacher(client).attach("gid://shopify/Product/1", "u", "t")

    assert result == ImageResult(success=False, cost=10)
    assert "No media data" in caplog.text


@pytest.mark.asyncio
async def test_attach_transport_error_is_zero_cost_failure():
    client = AsyncMock()
    client.execute.side_effect = ShopifyClientError("timeout")

    result = await ImageAttacher(client).attach("gid://shopify/Product/1", "u", "t")

    assert result == ImageResult(success=False, cost=0)


@pytest.mark.asyncio
async def test_attach_all_skips_failed_creates():
    client = AsyncMock()
    client.execute.return_value = _media_response(cost=10)
    results = [_created(1), BatchResult(success=False, index=2), _created(3)]

    image_results = await ImageAttacher(client).attach_all(results)

    assert len(image_results) == 2
    assert client.execute.call_count == 2
    assert sum(r.cost for r in image_results) == 20


@pytest.mark.asyncio
async def test_attach_all_collects_outcomes_despite_exception():
    """Test one raising call does not lose the other outcomes."""
    attacher = ImageAttacher(AsyncMock())

    async def fake_attach(product_id, image_url, alt_text):
        if product_id.endswith("/2"):
            raise RuntimeError("unexpected")
        return ImageResult(success=True, cost=10)

    with patch.object(attacher, "attach", side_effect=fake_attach):
        image_results = await attacher.attach_all([_created(1), _created(2), _created(3)])

    assert [r.success for r in image_results] == [True, False, True]
    assert [r.cost for r in image_results] == [10, 0, 10]


@pytest.mark.asyncio
async def test_attach_all_runs_calls_concurrently():
    """Test the first call can wait on the second, which only works if both are in flight."""
    second_started = asyncio.Event()
    client = AsyncMock()

    async def fake_execute(document, variables):
        if variables["productId"].endswith("/1"):
            await second_started.wait()
        else:
            second_started.set()
        return _media_response(cost=10)

    client.execute.side_effect = fake_execute

    image_results = await asyncio.wait_for(
        ImageAttacher(client).attach_all([_created(1), _created(2)]), timeout=2
    )

    assert all(r.success for r in image_results)


@pytest.mark.asyncio
async def test_attach_all_with_no_successes():
    client = AsyncMock()

    assert await ImageAttacher(client).attach_all([BatchResult(success=False, index=1)]) == []
    client.execute.assert_not_called()
