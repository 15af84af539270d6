"""Tests for meal analysis service."""

import asyncio

import pytest

from nibble.adapters.mock_analysis_client import MockAnalysisClient
from nibble.services.analysis import AnalysisService
from nibble.services.errors import AnalysisError
from tests.conftest import FakeAnalysisClient


def test_analyze_text_returns_validated_estimate() -> None:
    client = FakeAnalysisClient()
    service = AnalysisService(client=client, model="gpt-4o")

    analysis = asyncio.run(service.analyze_text("dal chawal"))

    assert analysis.name == "Dal and rice"
    assert analysis.calories == 420
    assert "dal chawal" in client.calls[0]["prompt"]
    assert client.calls[0]["image_data_url"] is None


def test_analyze_image_sends_data_url() -> None:
    client = FakeAnalysisClient()
    service = AnalysisService(client=client, model="gpt-4o")

    asyncio.run(service.analyze_image(b"\x89PNG\r\n\x1a\nrest"))

    assert str(client.calls[0]["image_data_url"]).startswith("data:image/png;base64,")


def test_model_error_raises_analysis_error() -> None:
    client = FakeAnalysisClient(
        payload={
            "name": "",
            "calories": 0,
            "protein": 0,
            "carbs": 0,
            "fat": 0,
            "confidence": 0,
            "error": "No food detected in image",
        }
    )
    service = AnalysisService(client=client, model="gpt-4o")

    with pytest.raises(AnalysisError, match="No food detected"):
        asyncio.run(service.analyze_image(b"\xff\xd8\xffjpeg"))


def test_invalid_payload_raises_analysis_error() -> None:
    client = FakeAnalysisClient(payload={"name": "Soup", "calories": -5})
    service = AnalysisService(client=client, model="gpt-4o")

    with pytest.raises(AnalysisError):
        asyncio.run(service.analyze_text("soup"))


def test_mock_client_estimates() -> None:
    service = AnalysisService(client=MockAnalysisClient(), model="mock")

    image = asyncio.run(service.analyze_image(b"\xff\xd8\xffjpeg"))
    text = asyncio.run(service.analyze_text("oatmeal"))

    assert image.name == "Grilled Chicken Salad"
    assert text.name == "Oatmeal with Blueberries"
