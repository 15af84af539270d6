"""Search over the bundled food composition database."""

import json
from dataclasses import dataclass
from pathlib import Path

from nibble.domain.food_database import DatabaseFood, FoodSearchResult
from nibble.domain.foods import FoodItem
from nibble.services.daily_log import new_food_item
from nibble.services.targets import round_half_up

DEFAULT_DATABASE_PATH = (
    Path(__file__).resolve().parents[1] / "data" / "indian_foods.json"
)

_MIN_QUERY_LENGTH = 2
_EXACT = 100
_PREFIX = 90
_WORD_PREFIX = 80
_SUBSTRING = 70


@dataclass
class FoodDatabaseService:
    """In-memory food database loaded once from JSON."""

    foods: list[DatabaseFood]

    @classmethod
    def from_file(cls, path: Path | str | None = None) -> "FoodDatabaseService":
        """Load the database from a JSON file, defaulting to the bundled one."""
        database_path = Path(path or DEFAULT_DATABASE_PATH)
        raw = json.loads(database_path.read_text(encoding="utf-8"))
        return cls(foods=[_parse_food(entry) for entry in raw])

    def search(self, query: str | None, limit: int = 10) -> list[FoodSearchResult]:
        """Search foods by name, best matches first."""
        if not query or len(query.strip()) < _MIN_QUERY_LENGTH:
            return []
        term = query.strip().lower()
        results: list[FoodSearchResult] = []
        for food in self.foods:
            relevance = _relevance(food.name.lower(), term)
            if relevance:
                results.append(FoodSearchResult(food=food, relevance=relevance))
        results.sort(key=lambda result: result.relevance, reverse=True)
        return results[:limit]

    def get_by_id(self, food_id: str) -> DatabaseFood | None:
        """Return a food by id."""
        return next((food for food in self.foods if food.id == food_id), None)

    def get_popular(self, count: int = 10) -> list[DatabaseFood]:
        """Return the first ``count`` foods of the database."""
        return self.foods[:count]

    def count(self) -> int:
        """Return the number of foods in the database."""
        return len(self.foods)

    @staticmethod
    def to_food_item(food: DatabaseFood, grams: float = 100) -> FoodItem:
        """Convert a database entry to a loggable food scaled to ``grams``."""
        ratio = grams / 100
        return new_food_item(
            name=food.name,
            calories=round_half_up(food.calories * ratio),
            protein_g=_one_decimal(food.protein_g * ratio),
            carbs_g=_one_decimal(food.carbs_g * ratio),
            fat_g=_one_decimal(food.fat_g * ratio),
            weight_g=grams,
        )


def _one_decimal(value: float) -> float:
    return round_half_up(value * 10) / 10


def _relevance(name: str, term: str) -> int:
    if name == term:
        return _EXACT
    if name.startswith(term):
        return _PREFIX
    if any(word.startswith(term) for word in name.split()):
        return _WORD_PREFIX
    if term in name:
        return _SUBSTRING
    return 0


def _parse_food(entry: dict[str, object]) -> DatabaseFood:
    return DatabaseFood(
        id=str(entry["id"]),
        name=str(entry.get("name", "")),
        calories=float(entry.get("calories", 0.0)),
        protein_g=float(entry.get("protein", 0.0)),
        carbs_g=float(entry.get("carbs", 0.0)),
        fat_g=float(entry.get("fat", 0.0)),
        fiber_g=float(entry.get("fiber", 0.0)),
        serving_unit=str(entry.get("servingUnit") or "serving"),
        serving_calories=float(entry.get("servingCalories", 0.0)),
        serving_protein_g=float(entry.get("servingProtein", 0.0)),
        serving_carbs_g=float(entry.get("servingCarbs", 0.0)),
        serving_fat_g=float(entry.get("servingFat", 0.0)),
        source=str(entry.get("source") or "unknown"),
    )
