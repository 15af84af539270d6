"""Supabase storage for signed-in users."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

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


@dataclass
class SupabaseStorage(StorageRepository):
    """Supabase implementation bound to a single user."""

    client: Client
    user_id: str

    def get_user_profile(self) -> UserProfile | None:
        """Return the user's profile row."""
        response = (
            self.client.table("profiles")
            .select("*")
            .eq("id", self.user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def save_user_profile(self, profile: UserProfile) -> None:
        """Upsert the user's profile row."""
        self.client.table("profiles").upsert(
            {
                "id": self.user_id,
                "name": profile.name,
                "height": profile.height_cm,
                "weight": profile.weight_kg,
                "age": profile.age,
                "gender": profile.gender.value,
                "goal": profile.goal.value,
                "activity_level": profile.activity_level.value,
                "dietary_preferences": list(profile.dietary_preferences),
                "target_calories": profile.targets.calories,
                "target_protein": profile.targets.protein_g,
                "target_carbs": profile.targets.carbs_g,
                "target_fat": profile.targets.fat_g,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()

    def get_daily_log(self, date: str) -> DailyLog | None:
        """Return the foods logged on a date."""
        response = (
            self.client.table("food_logs")
            .select("*")
            .eq("user_id", self.user_id)
            .eq("date", date)
            .order("timestamp", desc=False)
            .execute()
        )
        if not response.data:
            return None
        return DailyLog(
            date=date, foods=[food_from_record(row) for row in response.data]
        )

    def save_daily_log(self, log: DailyLog) -> None:
        """Replace all rows for the log's date."""
        self.client.table("food_logs").delete().eq("user_id", self.user_id).eq(
            "date", log.date
        ).execute()
        if log.foods:
            self.client.table("food_logs").insert(
                [self._food_row(log.date, food) for food in log.foods]
            ).execute()

    def add_food_to_log(self, date: str, food: FoodItem) -> None:
        """Insert a food row for a date."""
        self.client.table("food_logs").insert(self._food_row(date, food)).execute()

    def remove_food_from_log(self, date: str, food_id: str) -> None:
        """Delete a food row."""
        self.client.table("food_logs").delete().eq("user_id", self.user_id).eq(
            "date", date
        ).eq("id", food_id).execute()

    def get_all_logs(self) -> list[DailyLog]:
        """Return all logs grouped by date, newest first."""
        response = (
            self.client.table("food_logs")
            .select("*")
            .eq("user_id", self.user_id)
            .order("date", desc=True)
            .order("timestamp", desc=False)
            .execute()
        )
        grouped: dict[str, list[FoodItem]] = {}
        for row in response.data or []:
            grouped.setdefault(str(row.get("date")), []).append(food_from_record(row))
        return [DailyLog(date=date, foods=foods) for date, foods in grouped.items()]

    def _food_row(self, date: str, food: FoodItem) -> dict[str, object]:
        return {"user_id": self.user_id, "date": date, **food_to_record(food)}


def _parse_profile(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        name=str(row.get("name") or ""),
        height_cm=float(row.get("height", 0.0)),
        weight_kg=float(row.get("weight", 0.0)),
        age=int(row.get("age", 0)),
        gender=Gender(row.get("gender")),
        activity_level=ActivityLevel(row.get("activity_level")),
        goal=Goal(row.get("goal")),
        targets=NutritionTargets(
            calories=int(row.get("target_calories", 0)),
            protein_g=int(row.get("target_protein", 0)),
            carbs_g=int(row.get("target_carbs", 0)),
            fat_g=int(row.get("target_fat", 0)),
        ),
        dietary_preferences=list(row.get("dietary_preferences") or []),
    )
