"""Domain models for user profiles and daily targets."""

from dataclasses import dataclass, field
from enum import Enum


class Gender(Enum):
    """Gender options used by the BMR equation."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(Enum):
    """Self-reported daily activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class Goal(Enum):
    """Weight goal driving the calorie adjustment."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


@dataclass(frozen=True)
class NutritionTargets:
    """Daily calorie and macro targets."""

    calories: int
    protein_g: int
    carbs_g: int
    fat_g: int


@dataclass(frozen=True)
class UserProfile:
    """Body stats, preferences and the targets derived from them."""

    name: str
    height_cm: float
    weight_kg: float
    age: int
    gender: Gender
    activity_level: ActivityLevel
    goal: Goal
    targets: NutritionTargets
    dietary_preferences: list[str] = field(default_factory=list)
