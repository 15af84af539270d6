"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from nibble.adapters.local_storage import LocalJsonStorage
from nibble.adapters.mock_analysis_client import MockAnalysisClient
from nibble.adapters.openai_analysis_client import OpenAIAnalysisClient
from nibble.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from nibble.adapters.supabase_storage import SupabaseStorage
from nibble.config import Settings
from nibble.services.analysis import AnalysisClient, AnalysisService
from nibble.services.barcode import BarcodeService
from nibble.services.cache import InMemoryCache
from nibble.services.daily_log import DailyLogService
from nibble.services.food_database import FoodDatabaseService
from nibble.services.profile import ProfileService
from nibble.services.storage import StorageRepository
from nibble.services.suggestions import SuggestionService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    storage: StorageRepository
    profile_service: ProfileService
    daily_log_service: DailyLogService
    suggestion_service: SuggestionService
    food_database_service: FoodDatabaseService
    barcode_service: BarcodeService
    analysis_service: AnalysisService
    close_resources: Callable[[], Awaitable[None]]


def build_storage(settings: Settings) -> StorageRepository:
    """Select the storage backend once, at startup."""
    if settings.storage_backend == "supabase":
        if not (
            settings.supabase_url
            and settings.supabase_service_key
            and settings.supabase_user_id
        ):
            raise ValueError(
                "Supabase storage requires SUPABASE_URL, SUPABASE_SERVICE_KEY "
                "and SUPABASE_USER_ID"
            )
        _logger.info("Using Supabase storage for user %s", settings.supabase_user_id)
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseStorage(client=client, user_id=settings.supabase_user_id)
    _logger.info("Using local storage at %s", settings.local_storage_path)
    return LocalJsonStorage(Path(settings.local_storage_path))


def build_analysis_client(settings: Settings) -> AnalysisClient:
    """Select the AI provider."""
    if settings.ai_provider == "openai":
        if not settings.openai_api_key:
            raise ValueError("The openai provider requires OPENAI_API_KEY")
        return OpenAIAnalysisClient.create(settings.openai_api_key)
    return MockAnalysisClient()


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    storage = build_storage(resolved_settings)
    profile_service = ProfileService(storage)
    daily_log_service = DailyLogService(
        storage=storage, timezone_name=resolved_settings.timezone
    )
    suggestion_service = SuggestionService(
        profile_service=profile_service,
        daily_log_service=daily_log_service,
        history_days=resolved_settings.history_days,
        max_suggestions=resolved_settings.max_suggestions,
    )
    food_database_service = FoodDatabaseService.from_file(
        resolved_settings.food_database_path
    )
    openfoodfacts_client = HttpxOpenFoodFactsClient.create(
        resolved_settings.openfoodfacts_base_url
    )
    barcode_service = BarcodeService(
        client=openfoodfacts_client,
        cache=InMemoryCache(),
    )
    analysis_client = build_analysis_client(resolved_settings)
    analysis_service = AnalysisService(
        client=analysis_client,
        model=resolved_settings.openai_model,
    )

    async def close_resources() -> None:
        await openfoodfacts_client.close()
        if isinstance(analysis_client, OpenAIAnalysisClient):
            await analysis_client.close()

    return AppContainer(
        settings=resolved_settings,
        storage=storage,
        profile_service=profile_service,
        daily_log_service=daily_log_service,
        suggestion_service=suggestion_service,
        food_database_service=food_database_service,
        barcode_service=barcode_service,
        analysis_service=analysis_service,
        close_resources=close_resources,
    )
