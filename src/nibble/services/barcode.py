"""Barcode lookup service backed by OpenFoodFacts."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from nibble.adapters.openfoodfacts_client import OpenFoodFactsClient
from nibble.domain.foods import FoodItem
from nibble.services.cache import Cache
from nibble.services.daily_log import new_food_item
from nibble.services.targets import round_half_up

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

_DEFAULT_WEIGHT_G = 100.0


@dataclass
class BarcodeService:
    """Maps packaged products to loggable foods, with caching."""

    client: OpenFoodFactsClient
    cache: Cache
    product_ttl_seconds: int = 86400
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def lookup(self, barcode: str) -> FoodItem | None:
        """Return a food for a barcode, or None when the product is unknown."""
        cache_key = f"off:product:{barcode}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, FoodItem):
            return cached

        payload = await self._call_with_retry(
            lambda: self.client.get_product(barcode), action=f"lookup:{barcode}"
        )
        if not payload or payload.get("status") != 1 or not payload.get("product"):
            _logger.info("Barcode not found: %s", barcode)
            return None

        food = _product_to_food(payload["product"], barcode)
        self.cache.set(cache_key, food, ttl_seconds=self.product_ttl_seconds)
        return food

    async def _call_with_retry(
        self,
        func: "Callable[[], Awaitable[dict[str, object] | None]]",
        *,
        action: str,
    ) -> dict[str, object] | None:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "OpenFoodFacts %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _product_to_food(product: dict[str, object], barcode: str) -> FoodItem:
    """Scale per-100g nutriments to the product's serving size."""
    name = product.get("product_name_en") or product.get("product_name")
    name = name or "Unknown Product"
    brands = product.get("brands")
    if brands:
        name = f"{name} ({brands})"

    weight = _serving_weight(product.get("serving_quantity"))
    nutriments = product.get("nutriments") or {}
    ratio = weight / 100

    def scaled(key: str) -> int:
        return round_half_up(float(nutriments.get(key) or 0) * ratio)

    return new_food_item(
        name=str(name),
        calories=scaled("energy-kcal_100g"),
        protein_g=scaled("proteins_100g"),
        carbs_g=scaled("carbohydrates_100g"),
        fat_g=scaled("fat_100g"),
        weight_g=weight,
        food_id=f"off_{barcode}",
    )


def _serving_weight(raw: object) -> float:
    """Parse serving_quantity, which OpenFoodFacts returns as number or string."""
    if isinstance(raw, int | float) and not isinstance(raw, bool) and raw > 0:
        return float(raw)
    if isinstance(raw, str):
        try:
            parsed = float(raw.strip().removesuffix("g").strip())
        except ValueError:
            return _DEFAULT_WEIGHT_G
        if parsed > 0:
            return parsed
    return _DEFAULT_WEIGHT_G
