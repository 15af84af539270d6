"""Models for AI meal analysis results."""

from pydantic import BaseModel, Field


class NutritionAnalysis(BaseModel):
    """Estimated nutrition for a described or photographed meal."""

    name: str
    calories: float = Field(ge=0.0)
    protein: float = Field(ge=0.0)
    carbs: float = Field(ge=0.0)
    fat: float = Field(ge=0.0)
    confidence: float = Field(ge=0.0, le=1.0)
