"""Profile service keeping derived targets in sync with body stats."""

import dataclasses
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from nibble.domain.profile import ActivityLevel, Gender, Goal, UserProfile
from nibble.services.errors import ProfileNotFoundError
from nibble.services.storage import StorageRepository
from nibble.services.targets import calculate_targets

_TARGET_INPUTS = frozenset(
    {"height_cm", "weight_kg", "age", "gender", "activity_level", "goal"}
)

_logger = logging.getLogger(__name__)


@dataclass
class ProfileService:
    """Application service for the user profile."""

    storage: StorageRepository

    def get_profile(self) -> UserProfile | None:
        """Return the stored profile."""
        return self.storage.get_user_profile()

    def create_profile(  # noqa: PLR0913
        self,
        *,
        name: str,
        height_cm: float,
        weight_kg: float,
        age: int,
        gender: Gender,
        activity_level: ActivityLevel,
        goal: Goal,
        dietary_preferences: Iterable[str] = (),
    ) -> UserProfile:
        """Create or replace the profile with freshly computed targets."""
        profile = UserProfile(
            name=name,
            height_cm=height_cm,
            weight_kg=weight_kg,
            age=age,
            gender=gender,
            activity_level=activity_level,
            goal=goal,
            targets=calculate_targets(
                weight_kg, height_cm, age, gender, activity_level, goal
            ),
            dietary_preferences=list(dietary_preferences),
        )
        self.storage.save_user_profile(profile)
        return profile

    def update_profile(self, **changes: object) -> UserProfile:
        """Apply changes and recompute targets when their inputs changed."""
        if "targets" in changes:
            raise ValueError("Targets are derived and cannot be set directly")
        current = self.storage.get_user_profile()
        if current is None:
            raise ProfileNotFoundError("No profile has been created yet")

        if "dietary_preferences" in changes:
            changes["dietary_preferences"] = list(changes["dietary_preferences"])
        updated = dataclasses.replace(current, **changes)
        if any(
            getattr(updated, name) != getattr(current, name) for name in _TARGET_INPUTS
        ):
            updated = dataclasses.replace(
                updated,
                targets=calculate_targets(
                    updated.weight_kg,
                    updated.height_cm,
                    updated.age,
                    updated.gender,
                    updated.activity_level,
                    updated.goal,
                ),
            )
            _logger.info(
                "Recomputed targets: calories=%s protein=%s carbs=%s fat=%s",
                updated.targets.calories,
                updated.targets.protein_g,
                updated.targets.carbs_g,
                updated.targets.fat_g,
            )
        self.storage.save_user_profile(updated)
        return updated
