"""Meal suggestion engine driven by remaining macro needs."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date as date_type
from datetime import timedelta

from nibble.domain.foods import DailyLog, FoodItem, MacroTotals
from nibble.domain.profile import NutritionTargets
from nibble.domain.suggestions import Dashboard, FoodSuggestion, RemainingNeeds
from nibble.services.daily_log import DailyLogService
from nibble.services.errors import ProfileNotFoundError
from nibble.services.profile import ProfileService

_OVER_BUDGET_FACTOR = 1.2
_OVER_BUDGET_PENALTY = 50
_MACRO_MATCH_WEIGHT = 30
_BUDGET_FIT_BONUS = 20
_MEANINGFUL_PORTION = 0.3
_DOMINANT_NEED_SHARE = 0.4
_DOMINANT_FOOD_SHARE = 0.3
_GOALS_MET_CALORIES = 100

_MACRO_LABELS = (
    ("protein_g", "High protein"),
    ("carbs_g", "Good carbs"),
    ("fat_g", "Healthy fats"),
)


def calculate_remaining_needs(
    targets: NutritionTargets, consumed: MacroTotals
) -> RemainingNeeds:
    """Return what is left of each target, never below zero."""
    return RemainingNeeds(
        calories=max(0, targets.calories - consumed.calories),
        protein_g=max(0, targets.protein_g - consumed.protein_g),
        carbs_g=max(0, targets.carbs_g - consumed.carbs_g),
        fat_g=max(0, targets.fat_g - consumed.fat_g),
    )


def generate_suggestions(
    remaining: RemainingNeeds,
    food_history: list[FoodItem],
    max_suggestions: int = 3,
) -> list[FoodSuggestion]:
    """Rank previously logged foods by how well they fill the remaining needs.

    Results are sorted by descending score, unique by food name (the best
    scoring entry wins) and capped at ``max_suggestions``.
    """
    if not food_history or max_suggestions <= 0:
        return []

    scored = sorted(
        (_score_food(food, remaining) for food in food_history),
        key=lambda suggestion: suggestion.score,
        reverse=True,
    )
    unique: dict[str, FoodSuggestion] = {}
    for suggestion in scored:
        unique.setdefault(suggestion.food.name, suggestion)
        if len(unique) == max_suggestions:
            break
    return list(unique.values())


def collect_food_history(
    get_daily_log: Callable[[str], DailyLog | None],
    days: int = 30,
    today: date_type | None = None,
) -> list[FoodItem]:
    """Concatenate foods logged over the last ``days`` days, today included."""
    start = today or date_type.today()
    foods: list[FoodItem] = []
    for offset in range(days):
        log = get_daily_log((start - timedelta(days=offset)).isoformat())
        if log is not None:
            foods.extend(log.foods)
    return foods


def _score_food(food: FoodItem, remaining: RemainingNeeds) -> FoodSuggestion:
    score = 0.0
    labels: list[str] = []

    if food.calories > remaining.calories * _OVER_BUDGET_FACTOR:
        score -= _OVER_BUDGET_PENALTY

    need_shares = _macro_shares(remaining.protein_g, remaining.carbs_g, remaining.fat_g)
    food_shares = _macro_shares(food.protein_g, food.carbs_g, food.fat_g)
    if need_shares is not None and food_shares is not None:
        for attr, label in _MACRO_LABELS:
            need_share = need_shares[attr]
            food_share = food_shares[attr]
            score += (1 - abs(food_share - need_share)) * _MACRO_MATCH_WEIGHT
            if need_share > _DOMINANT_NEED_SHARE and food_share > _DOMINANT_FOOD_SHARE:
                labels.append(label)

    portion_floor = remaining.calories * _MEANINGFUL_PORTION
    fits_budget = portion_floor < food.calories <= remaining.calories
    if fits_budget:
        score += _BUDGET_FIT_BONUS

    if labels:
        reason = ", ".join(labels)
    elif fits_budget:
        reason = "Fits your budget"
    elif food.calories < portion_floor:
        reason = "Light option"
    else:
        reason = "Balanced meal"
    return FoodSuggestion(food=food, score=score, reason=reason)


def _macro_shares(
    protein_g: float, carbs_g: float, fat_g: float
) -> dict[str, float] | None:
    total = protein_g + carbs_g + fat_g
    if total <= 0:
        return None
    return {
        "protein_g": protein_g / total,
        "carbs_g": carbs_g / total,
        "fat_g": fat_g / total,
    }


@dataclass
class SuggestionService:
    """Builds today's dashboard with ranked suggestions."""

    profile_service: ProfileService
    daily_log_service: DailyLogService
    history_days: int = 30
    max_suggestions: int = 3

    def get_dashboard(self) -> Dashboard:
        """Return today's targets, progress and suggestions."""
        profile = self.profile_service.get_profile()
        if profile is None:
            raise ProfileNotFoundError("No profile has been created yet")

        current = self.daily_log_service.current_date()
        today = current.isoformat()
        consumed = self.daily_log_service.consumed_totals(today)
        remaining = calculate_remaining_needs(profile.targets, consumed)
        goals_met = remaining.calories <= _GOALS_MET_CALORIES
        suggestions: list[FoodSuggestion] = []
        if not goals_met:
            history = collect_food_history(
                self.daily_log_service.find_log,
                self.history_days,
                current,
            )
            suggestions = generate_suggestions(
                remaining, history, self.max_suggestions
            )
        return Dashboard(
            date=today,
            targets=profile.targets,
            consumed=consumed,
            remaining=remaining,
            goals_met=goals_met,
            suggestions=suggestions,
        )
