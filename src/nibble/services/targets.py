"""Daily calorie and macro target calculation."""

import math

from nibble.domain.profile import ActivityLevel, Gender, Goal, NutritionTargets

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

# Roughly 0.5 kg per week.
GOAL_MODIFIERS: dict[Goal, int] = {
    Goal.LOSE: -500,
    Goal.MAINTAIN: 0,
    Goal.GAIN: 500,
}

_GENDER_OFFSETS: dict[Gender, float] = {
    Gender.MALE: 5,
    Gender.FEMALE: -161,
    Gender.OTHER: -78,
}

_KCAL_PER_G_PROTEIN = 4
_KCAL_PER_G_CARBS = 4
_KCAL_PER_G_FAT = 9

_FAT_RATIO = 0.25
_PROTEIN_RATIO_MAINTAIN = 0.20
_PROTEIN_RATIO_CHANGE = 0.25
# ICMR RDA minimum, grams of protein per kg of body weight.
_MIN_PROTEIN_G_PER_KG = 0.83


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def calculate_bmr(
    weight_kg: float, height_cm: float, age: float, gender: Gender
) -> int:
    """Return basal metabolic rate via the Mifflin-St Jeor equation."""
    bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age + _GENDER_OFFSETS[gender]
    return round_half_up(bmr)


def calculate_targets(  # noqa: PLR0913
    weight_kg: float,
    height_cm: float,
    age: float,
    gender: Gender,
    activity_level: ActivityLevel,
    goal: Goal,
) -> NutritionTargets:
    """Derive daily targets from body stats, activity and goal.

    Protein and fat are fixed shares of the calorie target, protein is raised
    to the body-weight floor when needed, and carbs take the remainder.
    """
    bmr = calculate_bmr(weight_kg, height_cm, age, gender)
    tdee = round_half_up(bmr * ACTIVITY_MULTIPLIERS[activity_level])
    calories = max(0, tdee + GOAL_MODIFIERS[goal])

    protein_ratio = (
        _PROTEIN_RATIO_MAINTAIN if goal is Goal.MAINTAIN else _PROTEIN_RATIO_CHANGE
    )
    protein_g = round_half_up(calories * protein_ratio / _KCAL_PER_G_PROTEIN)
    fat_g = round_half_up(calories * _FAT_RATIO / _KCAL_PER_G_FAT)

    min_protein_g = max(0, round_half_up(weight_kg * _MIN_PROTEIN_G_PER_KG))
    protein_g = max(protein_g, min_protein_g)

    remaining_kcal = (
        calories - protein_g * _KCAL_PER_G_PROTEIN - fat_g * _KCAL_PER_G_FAT
    )
    carbs_g = max(0, round_half_up(remaining_kcal / _KCAL_PER_G_CARBS))

    return NutritionTargets(
        calories=calories,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fat_g=fat_g,
    )
