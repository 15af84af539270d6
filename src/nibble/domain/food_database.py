"""Domain models for the static food composition database."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DatabaseFood:
    """Food composition entry with per-100g and per-serving values."""

    id: str
    name: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float
    serving_unit: str
    serving_calories: float
    serving_protein_g: float
    serving_carbs_g: float
    serving_fat_g: float
    source: str


@dataclass(frozen=True)
class FoodSearchResult:
    """Food database match with a relevance score."""

    food: DatabaseFood
    relevance: int
