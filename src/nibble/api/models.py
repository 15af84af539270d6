"""Pydantic models for API request bodies."""

from pydantic import BaseModel, Field

from nibble.domain.profile import ActivityLevel, Gender, Goal


class ProfileRequest(BaseModel):
    """Onboarding payload."""

    name: str = ""
    height_cm: float = Field(gt=0)
    weight_kg: float = Field(gt=0)
    age: int = Field(gt=0)
    gender: Gender
    activity_level: ActivityLevel
    goal: Goal
    dietary_preferences: list[str] = Field(default_factory=list)


class ProfileUpdateRequest(BaseModel):
    """Settings edit payload; omitted fields are left unchanged."""

    name: str | None = None
    height_cm: float | None = Field(default=None, gt=0)
    weight_kg: float | None = Field(default=None, gt=0)
    age: int | None = Field(default=None, gt=0)
    gender: Gender | None = None
    activity_level: ActivityLevel | None = None
    goal: Goal | None = None
    dietary_preferences: list[str] | None = None


class FoodRequest(BaseModel):
    """A food to log or to replace a logged one with."""

    name: str = Field(min_length=1)
    calories: float = Field(ge=0)
    protein_g: float = Field(default=0, ge=0)
    carbs_g: float = Field(default=0, ge=0)
    fat_g: float = Field(default=0, ge=0)
    weight_g: float = Field(default=100, ge=0)


class TextAnalysisRequest(BaseModel):
    """Free-text meal description."""

    description: str = Field(min_length=1)
