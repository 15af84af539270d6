"""Shared test fixtures."""

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from nibble.adapters.openfoodfacts_client import OpenFoodFactsClient
from nibble.config import Settings
from nibble.containers import AppContainer
from nibble.domain.foods import DailyLog, FoodItem
from nibble.domain.profile import UserProfile
from nibble.services.analysis import AnalysisClient, AnalysisService
from nibble.services.barcode import BarcodeService
from nibble.services.cache import InMemoryCache
from nibble.services.daily_log import DailyLogService
from nibble.services.food_database import FoodDatabaseService
from nibble.services.profile import ProfileService
from nibble.services.storage import StorageRepository
from nibble.services.suggestions import SuggestionService


def make_food(  # noqa: PLR0913
    name: str,
    calories: float,
    protein_g: float = 0,
    carbs_g: float = 0,
    fat_g: float = 0,
    food_id: str | None = None,
) -> FoodItem:
    """Build a food with a deterministic id and timestamp."""
    return FoodItem(
        id=food_id or f"id-{name.lower().replace(' ', '-')}",
        name=name,
        calories=calories,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fat_g=fat_g,
        weight_g=100,
        timestamp=1700000000000,
    )


@dataclass
class InMemoryStorage(StorageRepository):
    """In-memory storage for tests."""

    profile: UserProfile | None = None
    logs: dict[str, DailyLog] = field(default_factory=dict)
    requested_dates: list[str] = field(default_factory=list)

    def get_user_profile(self) -> UserProfile | None:
        return self.profile

    def save_user_profile(self, profile: UserProfile) -> None:
        self.profile = profile

    def get_daily_log(self, date: str) -> DailyLog | None:
        self.requested_dates.append(date)
        return self.logs.get(date)

    def save_daily_log(self, log: DailyLog) -> None:
        self.logs[log.date] = log

    def add_food_to_log(self, date: str, food: FoodItem) -> None:
        log = self.logs.get(date) or DailyLog(date=date)
        self.logs[date] = DailyLog(date=date, foods=[*log.foods, food])

    def remove_food_from_log(self, date: str, food_id: str) -> None:
        log = self.logs.get(date)
        if log is not None:
            self.logs[date] = DailyLog(
                date=date, foods=[food for food in log.foods if food.id != food_id]
            )

    def get_all_logs(self) -> list[DailyLog]:
        return sorted(self.logs.values(), key=lambda log: log.date, reverse=True)


@dataclass
class FakeAnalysisClient(AnalysisClient):
    """Fake analysis client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "name": "Dal and rice",
            "calories": 420,
            "protein": 14,
            "carbs": 70,
            "fat": 8,
            "confidence": 0.8,
            "error": None,
        }
    )
    calls: list[dict[str, object]] = field(default_factory=list)

    async def analyze(
        self,
        *,
        model: str,
        prompt: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        self.calls.append(
            {"model": model, "prompt": prompt, "image_data_url": image_data_url}
        )
        return self.payload


@dataclass
class FakeOpenFoodFactsClient(OpenFoodFactsClient):
    """Fake OpenFoodFacts client with in-memory products."""

    products: dict[str, dict[str, object]] = field(
        default_factory=lambda: {
            "8901058000290": {
                "status": 1,
                "product": {
                    "product_name": "Instant Noodles",
                    "brands": "Maggi",
                    "serving_quantity": 70,
                    "nutriments": {
                        "energy-kcal_100g": 427,
                        "proteins_100g": 9.1,
                        "carbohydrates_100g": 62,
                        "fat_100g": 15.6,
                    },
                },
            }
        }
    )
    calls: int = 0

    async def get_product(self, barcode: str) -> dict[str, object] | None:
        self.calls += 1
        return self.products.get(barcode)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        storage_backend="local",
        local_storage_path=str(tmp_path / "storage.json"),
        ai_provider="mock",
    )


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def analysis_client() -> FakeAnalysisClient:
    return FakeAnalysisClient()


@pytest.fixture
def container(
    settings: Settings,
    storage: InMemoryStorage,
    analysis_client: FakeAnalysisClient,
) -> AppContainer:
    profile_service = ProfileService(storage)
    daily_log_service = DailyLogService(storage=storage, timezone_name="UTC")
    suggestion_service = SuggestionService(
        profile_service=profile_service,
        daily_log_service=daily_log_service,
    )
    barcode_service = BarcodeService(
        client=FakeOpenFoodFactsClient(),
        cache=InMemoryCache(),
    )
    analysis_service = AnalysisService(client=analysis_client, model="test-model")

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        storage=storage,
        profile_service=profile_service,
        daily_log_service=daily_log_service,
        suggestion_service=suggestion_service,
        food_database_service=FoodDatabaseService.from_file(),
        barcode_service=barcode_service,
        analysis_service=analysis_service,
        close_resources=close_resources,
    )
