"""Domain models for meal suggestions."""

from dataclasses import dataclass, field

from nibble.domain.foods import FoodItem, MacroTotals
from nibble.domain.profile import NutritionTargets


@dataclass(frozen=True)
class RemainingNeeds:
    """Gap between daily targets and consumption, floored at zero."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class FoodSuggestion:
    """A scored food recommendation."""

    food: FoodItem
    score: float
    reason: str


@dataclass(frozen=True)
class Dashboard:
    """Today's progress and what to eat next."""

    date: str
    targets: NutritionTargets
    consumed: MacroTotals
    remaining: RemainingNeeds
    goals_met: bool
    suggestions: list[FoodSuggestion] = field(default_factory=list)
