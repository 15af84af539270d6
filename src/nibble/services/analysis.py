"""Meal analysis service using LLMs."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from nibble.domain.analysis import NutritionAnalysis
from nibble.services.errors import AnalysisError

ANALYSIS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "calories": {"type": "number", "minimum": 0},
        "protein": {"type": "number", "minimum": 0},
        "carbs": {"type": "number", "minimum": 0},
        "fat": {"type": "number", "minimum": 0},
        "confidence": {"type": "number", "minimum": 0.0, "maximum": 1.0},
        "error": {"anyOf": [{"type": "string"}, {"type": "null"}]},
    },
    "required": ["name", "calories", "protein", "carbs", "fat", "confidence", "error"],
    "additionalProperties": False,
}

IMAGE_PROMPT = (
    "Analyze this food image and estimate its nutrition. "
    "If you see multiple items, give the total for the entire meal. "
    "Report calories in kcal, protein, carbs and fat in grams, and your "
    "confidence in the estimate (0-1). "
    'If the image does not contain food, set error to "No food detected in image".'
)

TEXT_PROMPT = (
    "Estimate the nutrition of this food description, assuming typical "
    "serving sizes: {description}\n"
    "Report calories in kcal, protein, carbs and fat in grams, and your "
    "confidence in the estimate (0-1). Set error to null."
)

_logger = logging.getLogger(__name__)


class AnalysisClient(Protocol):
    """Interface for LLM nutrition estimation."""

    async def analyze(
        self,
        *,
        model: str,
        prompt: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        """Return structured nutrition estimate data."""


@dataclass
class AnalysisService:
    """Service that prepares analysis prompts and validates results."""

    client: AnalysisClient
    model: str

    async def analyze_image(self, image_bytes: bytes) -> NutritionAnalysis:
        """Estimate the nutrition of a meal photo."""
        raw = await self.client.analyze(
            model=self.model,
            prompt=IMAGE_PROMPT,
            schema=ANALYSIS_SCHEMA,
            image_data_url=_to_data_url(image_bytes),
        )
        return _validate(raw)

    async def analyze_text(self, description: str) -> NutritionAnalysis:
        """Estimate the nutrition of a described meal."""
        raw = await self.client.analyze(
            model=self.model,
            prompt=TEXT_PROMPT.format(description=description),
            schema=ANALYSIS_SCHEMA,
        )
        return _validate(raw)


def _validate(raw: dict[str, object]) -> NutritionAnalysis:
    error = raw.get("error")
    if error:
        _logger.info("Analysis rejected by model: %s", error)
        raise AnalysisError(str(error))
    try:
        return NutritionAnalysis.model_validate(raw)
    except ValidationError as exc:
        _logger.warning("Analysis returned an invalid payload: %s", exc)
        raise AnalysisError(
            "Unable to analyze this meal. Please ensure it contains food items."
        ) from exc


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
