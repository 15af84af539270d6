"""Storage interface shared by the local and remote backends."""

from typing import Protocol

from nibble.domain.foods import DailyLog, FoodItem
from nibble.domain.profile import UserProfile


class StorageRepository(Protocol):
    """Persistence interface for the profile and daily food logs."""

    def get_user_profile(self) -> UserProfile | None:
        """Return the stored profile, if any."""

    def save_user_profile(self, profile: UserProfile) -> None:
        """Create or replace the stored profile."""

    def get_daily_log(self, date: str) -> DailyLog | None:
        """Return the log for an ISO date, or None when nothing was logged."""

    def save_daily_log(self, log: DailyLog) -> None:
        """Replace the log for its date."""

    def add_food_to_log(self, date: str, food: FoodItem) -> None:
        """Append a food to the log for a date, creating the log if needed."""

    def remove_food_from_log(self, date: str, food_id: str) -> None:
        """Remove a food from the log for a date."""

    def get_all_logs(self) -> list[DailyLog]:
        """Return every stored log, newest date first."""
