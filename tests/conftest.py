"""
Pytest configuration for HyderAQI tests.

Provides shared fixtures and fake Gemini responses.
"""

import json
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from hyderaqi.config import Settings
from hyderaqi.llm_service import LLMService
from hyderaqi.location_data import Coordinates, LocationData
from hyderaqi.pollutants import Pollutants


def fake_response(payload=None, text=None, urls=None):
    """
    Builds an object shaped like a google-genai GenerateContentResponse.

    Args:
        payload: Dict serialized as the response text
        text: Raw response text (overrides payload)
        urls: Grounding URIs; None entries produce chunks without a web URI
    """
    if text is None:
        text = json.dumps(payload)

    chunks = []
    for url in urls or []:
        chunks.append(SimpleNamespace(web=SimpleNamespace(uri=url) if url is not None else None))

    candidate = SimpleNamespace(grounding_metadata=SimpleNamespace(grounding_chunks=chunks))
    return SimpleNamespace(text=text, candidates=[candidate])


def make_gemini_service(response=None, error=None):
    """Returns an LLMService in gemini mode backed by a mocked client."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=response, side_effect=error)
    return LLMService(mode="gemini", settings=Settings(api_key="test_key"), client=client)


def make_location(id="test-station", name="Test Station", aqi=82, status="Moderate", **overrides):
    """Builds a valid LocationData with sensible readings."""
    values = dict(
        id=id,
        name=name,
        aqi=aqi,
        status=status,
        pollutants=Pollutants(pm25=28, pm10=55, no2=18, so2=5, co=0.8, o3=42),
        temperature=31,
        humidity=45,
        coordinates=Coordinates(lat=17.44, lng=78.35),
        last_updated=datetime(2026, 1, 15, 14, 30, 0),
    )
    values.update(overrides)
    return LocationData(**values)


@pytest.fixture
def mock_settings():
    """Settings that never touch the environment."""
    return Settings(api_key=None, llm_mode="mock")


@pytest.fixture
def mock_llm_service(mock_settings):
    """LLMService in mock mode."""
    return LLMService(mode="mock", settings=mock_settings)
