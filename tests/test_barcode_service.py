"""Tests for barcode lookups."""

import asyncio

import httpx
import pytest

from nibble.services.barcode import BarcodeService
from nibble.services.cache import InMemoryCache
from tests.conftest import FakeOpenFoodFactsClient


def test_lookup_scales_nutriments_to_serving() -> None:
    client = FakeOpenFoodFactsClient()
    service = BarcodeService(client=client, cache=InMemoryCache())

    food = asyncio.run(service.lookup("8901058000290"))

    assert food is not None
    assert food.id == "off_8901058000290"
    assert food.name == "Instant Noodles (Maggi)"
    assert food.weight_g == 70
    assert food.calories == 299
    assert food.protein_g == 6
    assert food.carbs_g == 43
    assert food.fat_g == 11


def test_lookup_uses_cache() -> None:
    client = FakeOpenFoodFactsClient()
    service = BarcodeService(client=client, cache=InMemoryCache())

    asyncio.run(service.lookup("8901058000290"))
    asyncio.run(service.lookup("8901058000290"))

    assert client.calls == 1


def test_unknown_or_missing_products_return_none() -> None:
    client = FakeOpenFoodFactsClient(
        products={"123": {"status": 0, "status_verbose": "product not found"}}
    )
    service = BarcodeService(client=client, cache=InMemoryCache())

    assert asyncio.run(service.lookup("123")) is None
    assert asyncio.run(service.lookup("999")) is None


def test_defaults_for_sparse_product() -> None:
    client = FakeOpenFoodFactsClient(
        products={
            "42": {
                "status": 1,
                "product": {
                    "serving_quantity": "30g",
                    "nutriments": {"energy-kcal_100g": 500},
                },
            },
            "43": {
                "status": 1,
                "product": {"product_name_en": "Oat Bar", "serving_quantity": "n/a"},
            },
        }
    )
    service = BarcodeService(client=client, cache=InMemoryCache())

    sparse = asyncio.run(service.lookup("42"))
    bar = asyncio.run(service.lookup("43"))

    assert sparse is not None
    assert sparse.name == "Unknown Product"
    assert sparse.weight_g == 30
    assert sparse.calories == 150
    assert bar is not None
    assert bar.name == "Oat Bar"
    assert bar.weight_g == 100
    assert bar.calories == 0


class _FlakyClient:
    def __init__(self, failures: int) -> None:
        self.failures = failures
        self.calls = 0

    async def get_product(self, barcode: str) -> dict[str, object] | None:
        self.calls += 1
        if self.calls <= self.failures:
            raise httpx.ConnectError("boom")
        return None


def test_lookup_retries_once_then_raises() -> None:
    recovering = _FlakyClient(failures=1)
    service = BarcodeService(
        client=recovering, cache=InMemoryCache(), retry_delay_seconds=0
    )
    assert asyncio.run(service.lookup("1")) is None
    assert recovering.calls == 2

    failing = _FlakyClient(failures=5)
    service = BarcodeService(
        client=failing, cache=InMemoryCache(), retry_delay_seconds=0
    )
    with pytest.raises(httpx.ConnectError):
        asyncio.run(service.lookup("1"))
    assert failing.calls == 2


def test_scaled_nutriments_round_halves_up() -> None:
    client = FakeOpenFoodFactsClient(
        products={
            "7": {
                "status": 1,
                "product": {
                    "product_name": "Rusk",
                    "serving_quantity": 50,
                    "nutriments": {"energy-kcal_100g": 101, "proteins_100g": 5},
                },
            }
        }
    )
    service = BarcodeService(client=client, cache=InMemoryCache())

    food = asyncio.run(service.lookup("7"))

    assert food is not None
    assert food.calories == 51
    assert food.protein_g == 3
