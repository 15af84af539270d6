"""Tests for target calculation."""

import itertools

from nibble.domain.profile import ActivityLevel, Gender, Goal, NutritionTargets
from nibble.services.targets import (
    calculate_bmr,
    calculate_targets,
    round_half_up,
)


def test_round_half_up_rounds_halves_up() -> None:
    assert round_half_up(1642.5) == 1643
    assert round_half_up(135.5) == 136
    assert round_half_up(2.4) == 2


def test_bmr_gender_offsets() -> None:
    assert calculate_bmr(70, 170, 25, Gender.MALE) == 1643
    assert calculate_bmr(70, 170, 25, Gender.FEMALE) == 1477
    assert calculate_bmr(70, 170, 25, Gender.OTHER) == 1560


def test_targets_for_moderate_male_maintaining() -> None:
    targets = calculate_targets(
        70, 170, 25, Gender.MALE, ActivityLevel.MODERATE, Goal.MAINTAIN
    )

    assert targets == NutritionTargets(
        calories=2547, protein_g=127, carbs_g=350, fat_g=71
    )


def test_targets_for_sedentary_female_losing() -> None:
    targets = calculate_targets(
        60, 165, 30, Gender.FEMALE, ActivityLevel.SEDENTARY, Goal.LOSE
    )

    assert targets == NutritionTargets(
        calories=1084, protein_g=68, carbs_g=136, fat_g=30
    )


def test_goal_modifiers_shift_calories() -> None:
    args = (75, 175, 40, Gender.MALE, ActivityLevel.LIGHT)

    lose = calculate_targets(*args, Goal.LOSE)
    maintain = calculate_targets(*args, Goal.MAINTAIN)
    gain = calculate_targets(*args, Goal.GAIN)

    assert maintain.calories - lose.calories == 500
    assert gain.calories - maintain.calories == 500


def test_protein_raised_to_body_weight_floor() -> None:
    targets = calculate_targets(
        140, 100, 90, Gender.FEMALE, ActivityLevel.SEDENTARY, Goal.LOSE
    )

    assert targets.calories == 1197
    assert targets.protein_g == 116
    assert targets.fat_g == 33
    assert targets.carbs_g == 109


def test_very_low_calories_clamp_to_zero() -> None:
    targets = calculate_targets(
        40, 50, 100, Gender.FEMALE, ActivityLevel.SEDENTARY, Goal.LOSE
    )

    assert targets == NutritionTargets(calories=0, protein_g=33, carbs_g=0, fat_g=0)


def test_targets_are_non_negative_ints_with_protein_floor() -> None:
    for weight, height, age, gender, activity, goal in itertools.product(
        (45, 70, 95, 130),
        (150, 175, 195),
        (18, 45, 80),
        Gender,
        ActivityLevel,
        Goal,
    ):
        targets = calculate_targets(weight, height, age, gender, activity, goal)
        values = (
            targets.calories,
            targets.protein_g,
            targets.carbs_g,
            targets.fat_g,
        )

        assert all(isinstance(value, int) and value >= 0 for value in values)
        assert targets.protein_g >= round_half_up(weight * 0.83)
