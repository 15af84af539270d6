"""Daily food log service."""

import dataclasses
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from datetime import date as date_type
from uuid import uuid4
from zoneinfo import ZoneInfo

from nibble.domain.foods import DailyLog, FoodItem, MacroTotals
from nibble.services.errors import FoodNotFoundError
from nibble.services.storage import StorageRepository

_logger = logging.getLogger(__name__)


def new_food_item(  # noqa: PLR0913
    name: str,
    calories: float,
    protein_g: float,
    carbs_g: float,
    fat_g: float,
    weight_g: float = 100,
    food_id: str | None = None,
) -> FoodItem:
    """Build a food entry stamped with the current time."""
    return FoodItem(
        id=food_id or str(uuid4()),
        name=name,
        calories=calories,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fat_g=fat_g,
        weight_g=weight_g,
        timestamp=int(datetime.now(tz=UTC).timestamp() * 1000),
    )


def sum_foods(foods: list[FoodItem]) -> MacroTotals:
    """Return summed calories and macros for a list of foods."""
    return MacroTotals(
        calories=sum(food.calories for food in foods),
        protein_g=sum(food.protein_g for food in foods),
        carbs_g=sum(food.carbs_g for food in foods),
        fat_g=sum(food.fat_g for food in foods),
    )


@dataclass
class DailyLogService:
    """Application service for logging foods by calendar day."""

    storage: StorageRepository
    timezone_name: str = "UTC"

    def current_date(self) -> date_type:
        """Return today's date in the configured timezone."""
        return datetime.now(tz=ZoneInfo(self.timezone_name)).date()

    def today(self) -> str:
        """Return today's ISO date in the configured timezone."""
        return self.current_date().isoformat()

    def get_log(self, date: str) -> DailyLog:
        """Return the log for a date, empty when nothing was logged."""
        return self.storage.get_daily_log(date) or DailyLog(date=date)

    def add_food(self, date: str, food: FoodItem) -> DailyLog:
        """Append a food to a day's log."""
        self.storage.add_food_to_log(date, food)
        _logger.info("Logged food: date=%s name=%s", date, food.name)
        return self.get_log(date)

    def remove_food(self, date: str, food_id: str) -> DailyLog:
        """Remove a food from a day's log."""
        self.storage.remove_food_from_log(date, food_id)
        return self.get_log(date)

    def replace_food(self, date: str, food: FoodItem) -> DailyLog:
        """Replace a logged food with an edited version, keeping its position."""
        log = self.get_log(date)
        previous = next((item for item in log.foods if item.id == food.id), None)
        if previous is None:
            raise FoodNotFoundError(f"Food {food.id} is not logged on {date}")
        edited = dataclasses.replace(food, timestamp=previous.timestamp)
        updated = DailyLog(
            date=date,
            foods=[edited if item.id == food.id else item for item in log.foods],
        )
        self.storage.save_daily_log(updated)
        return updated

    def consumed_totals(self, date: str) -> MacroTotals:
        """Return what has been consumed on a date."""
        return sum_foods(self.get_log(date).foods)

    def list_logs(self) -> list[DailyLog]:
        """Return every stored log, newest first."""
        return self.storage.get_all_logs()

    def find_log(self, date: str) -> DailyLog | None:
        """Return the stored log for a date, or None when nothing was logged."""
        return self.storage.get_daily_log(date)
