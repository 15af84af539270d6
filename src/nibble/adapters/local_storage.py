"""JSON file storage for signed-out, single-device use."""

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from nibble.adapters.records import food_from_record, food_to_record
from nibble.domain.foods import DailyLog, FoodItem
from nibble.domain.profile import (
    ActivityLevel,
    Gender,
    Goal,
    NutritionTargets,
    UserProfile,
)
from nibble.services.storage import StorageRepository

PROFILE_KEY = "nibble_profile"
LOGS_PREFIX = "nibble_logs_"


@dataclass
class LocalJsonStorage(StorageRepository):
    """Key-value storage persisted as a single JSON document."""

    path: Path

    def get_user_profile(self) -> UserProfile | None:
        """Return the stored profile."""
        data = self._read().get(PROFILE_KEY)
        return _profile_from_document(data) if data else None

    def save_user_profile(self, profile: UserProfile) -> None:
        """Replace the stored profile."""
        self._write_key(PROFILE_KEY, _profile_to_document(profile))

    def get_daily_log(self, date: str) -> DailyLog | None:
        """Return the log stored for a date."""
        data = self._read().get(LOGS_PREFIX + date)
        return _log_from_document(data) if data else None

    def save_daily_log(self, log: DailyLog) -> None:
        """Replace the log for its date."""
        self._write_key(
            LOGS_PREFIX + log.date,
            {"date": log.date, "foods": [food_to_record(food) for food in log.foods]},
        )

    def add_food_to_log(self, date: str, food: FoodItem) -> None:
        """Append a food, creating the day's log on first use."""
        log = self.get_daily_log(date) or DailyLog(date=date)
        self.save_daily_log(DailyLog(date=date, foods=[*log.foods, food]))

    def remove_food_from_log(self, date: str, food_id: str) -> None:
        """Drop a food from a day's log if both exist."""
        log = self.get_daily_log(date)
        if log is None:
            return
        self.save_daily_log(
            DailyLog(date=date, foods=[f for f in log.foods if f.id != food_id])
        )

    def get_all_logs(self) -> list[DailyLog]:
        """Return all logs, newest date first."""
        logs = [
            _log_from_document(value)
            for key, value in self._read().items()
            if key.startswith(LOGS_PREFIX) and value
        ]
        return sorted(logs, key=lambda log: log.date, reverse=True)

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        content = self.path.read_text(encoding="utf-8")
        return json.loads(content) if content.strip() else {}

    def _write_key(self, key: str, value: object) -> None:
        document = self._read()
        document[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(document, handle)
            os.replace(tmp_name, self.path)
        except Exception:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def _profile_to_document(profile: UserProfile) -> dict[str, object]:
    return {
        "name": profile.name,
        "height": profile.height_cm,
        "weight": profile.weight_kg,
        "age": profile.age,
        "gender": profile.gender.value,
        "goal": profile.goal.value,
        "activityLevel": profile.activity_level.value,
        "dietaryPreferences": list(profile.dietary_preferences),
        "targetCalories": profile.targets.calories,
        "targetProtein": profile.targets.protein_g,
        "targetCarbs": profile.targets.carbs_g,
        "targetFat": profile.targets.fat_g,
    }


def _profile_from_document(data: dict[str, object]) -> UserProfile:
    return UserProfile(
        name=str(data.get("name", "")),
        height_cm=float(data["height"]),
        weight_kg=float(data["weight"]),
        age=int(data["age"]),
        gender=Gender(data["gender"]),
        activity_level=ActivityLevel(data["activityLevel"]),
        goal=Goal(data["goal"]),
        targets=NutritionTargets(
            calories=int(data["targetCalories"]),
            protein_g=int(data["targetProtein"]),
            carbs_g=int(data["targetCarbs"]),
            fat_g=int(data["targetFat"]),
        ),
        dietary_preferences=list(data.get("dietaryPreferences") or []),
    )


def _log_from_document(data: dict[str, object]) -> DailyLog:
    return DailyLog(
        date=str(data["date"]),
        foods=[food_from_record(food) for food in data.get("foods") or []],
    )
