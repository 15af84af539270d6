"""Domain models for logged foods and daily logs."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FoodItem:
    """A logged or candidate food entry."""

    id: str
    name: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    weight_g: float
    timestamp: int


@dataclass(frozen=True)
class DailyLog:
    """Foods logged on a single calendar day, in insertion order."""

    date: str
    foods: list[FoodItem] = field(default_factory=list)


@dataclass(frozen=True)
class MacroTotals:
    """Summed calories and macros."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
