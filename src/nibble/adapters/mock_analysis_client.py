"""Offline analysis client returning fixed estimates."""

from dataclasses import dataclass

from nibble.services.analysis import AnalysisClient


@dataclass
class MockAnalysisClient(AnalysisClient):
    """Analysis client for local development without an API key."""

    async def analyze(
        self,
        *,
        model: str,
        prompt: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        """Return a canned estimate for images or text."""
        if image_data_url:
            return {
                "name": "Grilled Chicken Salad",
                "calories": 450,
                "protein": 40,
                "carbs": 15,
                "fat": 20,
                "confidence": 0.95,
                "error": None,
            }
        return {
            "name": "Oatmeal with Blueberries",
            "calories": 300,
            "protein": 10,
            "carbs": 50,
            "fat": 6,
            "confidence": 0.85,
            "error": None,
        }
