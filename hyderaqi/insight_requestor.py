"""
Insight requestor module for the HyderAQI dashboard core.

This module contains the InsightRequestor class which asks the LLM service
for a structured health analysis of one location: a summary, a list of
health insights and a list of recommendations. Failures are reported to the
caller; the requestor never substitutes an empty or placeholder response.
"""

import logging

from google.genai import types

from .aqi_classifier import AqiTier, classify
from .exceptions import HyderAQIError, InsightRequestError
from .health_insights import HealthInsight, InsightResponse
from .llm_service import LLMService
from .location_data import LocationData
from .pollutants import POLLUTANT_LABELS
from .service_result import ServiceResult

logger = logging.getLogger(__name__)


INSIGHT_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "summary": types.Schema(type=types.Type.STRING),
        "insights": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "title": types.Schema(type=types.Type.STRING),
                    "description": types.Schema(type=types.Type.STRING),
                    "icon": types.Schema(type=types.Type.STRING),
                    "severity": types.Schema(
                        type=types.Type.STRING,
                        enum=["low", "medium", "high"],
                    ),
                },
                required=["title", "description", "icon", "severity"],
            ),
        ),
        "recommendations": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(type=types.Type.STRING),
        ),
    },
    required=["summary", "insights", "recommendations"],
)

# Offline insight severity per tier
_MOCK_SEVERITY = {
    AqiTier.GOOD: "low",
    AqiTier.MODERATE: "low",
    AqiTier.UNHEALTHY_FOR_SENSITIVE_GROUPS: "medium",
    AqiTier.UNHEALTHY: "medium",
    AqiTier.VERY_UNHEALTHY: "high",
    AqiTier.HAZARDOUS: "high",
}

_MOCK_RECOMMENDATIONS = {
    AqiTier.GOOD: [
        "Enjoy outdoor activities as usual.",
        "Ventilate your home while the air is clean.",
    ],
    AqiTier.MODERATE: [
        "Unusually sensitive people should limit prolonged outdoor exertion.",
        "Prefer parks and green areas over main roads for walks.",
    ],
    AqiTier.UNHEALTHY_FOR_SENSITIVE_GROUPS: [
        "Children, older adults and people with asthma should reduce outdoor exertion.",
        "Keep reliever medication at hand if you have a respiratory condition.",
        "Avoid jogging near heavy traffic corridors.",
    ],
    AqiTier.UNHEALTHY: [
        "Limit time outdoors, especially during evening traffic peaks.",
        "Wear an N95 mask when commuting.",
        "Run an air purifier indoors and keep windows closed.",
    ],
    AqiTier.VERY_UNHEALTHY: [
        "Avoid all outdoor physical activity.",
        "Wear an N95 mask if you must go outside.",
        "Keep windows closed and use an air purifier.",
    ],
    AqiTier.HAZARDOUS: [
        "Stay indoors and keep activity levels low.",
        "Seek medical help if you experience breathing difficulty.",
        "Use an air purifier and seal gaps around windows.",
    ],
}


class InsightRequestor:
    """
    Requests AI-generated health insights for a location.

    In "gemini" mode the LLM service is called with a fixed response schema.
    In "mock" mode a deterministic response is built from the classifier so
    the dashboard works offline.
    """

    def __init__(self, llm_service: LLMService, city: str = "Hyderabad"):
        self.llm_service = llm_service
        self.city = city

    def build_prompt(self, location: LocationData) -> str:
        """
        Builds the analysis prompt for a location.

        The prompt embeds the AQI, status, all six pollutant values,
        temperature and humidity, so the model has the full picture.
        """
        readings = ", ".join(
            f"{label}: {value}" for label, value, _ in location.pollutants.readings()
        )
        return (
            f"Analyze the air quality for {location.name}.\n"
            f"Current AQI: {location.aqi} ({location.status}).\n"
            f"Pollutants: {readings}.\n"
            f"Temperature: {location.temperature}°C, Humidity: {location.humidity}%.\n"
            f"\n"
            f"Provide a health analysis and localized recommendations for residents of {self.city}."
        )

    async def fetch(self, location: LocationData) -> ServiceResult[InsightResponse]:
        """
        Fetches insights and reports the outcome as a tagged result.

        Returns:
            ServiceResult.success with the InsightResponse, or
            ServiceResult.failure with the transport, format or schema error
        """
        if self.llm_service.mode == "mock":
            return ServiceResult.success(self._mock_insights(location))

        try:
            response = await self.llm_service.generate_structured(
                self.build_prompt(location), INSIGHT_SCHEMA
            )
            return ServiceResult.success(InsightResponse.from_dict(response.payload))
        except HyderAQIError as e:
            logger.error("Insight request for %s failed: %s", location.id, e)
            return ServiceResult.failure(e)

    async def request_insights(self, location: LocationData) -> InsightResponse:
        """
        Returns insights for a location, raising on any failure.

        Raises:
            InsightRequestError: Wrapping the underlying error
        """
        result = await self.fetch(location)
        try:
            return result.unwrap()
        except HyderAQIError as e:
            raise InsightRequestError(
                f"Could not get insights for {location.name}: {e}", cause=e
            ) from e

    def _mock_insights(self, location: LocationData) -> InsightResponse:
        """
        Deterministic offline response derived from the classifier.

        The same location always yields the same response.
        """
        classification = classify(location.aqi)
        tier = classification.tier
        p = location.pollutants

        insights = [
            HealthInsight(
                title="Respiratory health",
                description=(
                    f"AQI {location.aqi} is {classification.label.lower()}. "
                    f"PM2.5 at {p.pm25} µg/m³ is the main concern for lung health."
                ),
                icon="lungs",
                severity=_MOCK_SEVERITY[tier],
            ),
            HealthInsight(
                title="Traffic emissions",
                description=f"NO2 at {p.no2} µg/m³ and CO at {p.co} mg/m³ reflect local vehicle exhaust.",
                icon="car",
                severity="medium" if p.no2 > 40 else "low",
            ),
            HealthInsight(
                title="Heat and humidity",
                description=(
                    f"{location.temperature}°C with {location.humidity}% humidity; "
                    f"stay hydrated during afternoon hours."
                ),
                icon="temperature-high",
                severity="medium" if location.temperature >= 35 else "low",
            ),
        ]

        return InsightResponse(
            summary=(
                f"Air quality in {location.name} is {classification.label} "
                f"with an AQI of {location.aqi}."
            ),
            insights=insights,
            recommendations=list(_MOCK_RECOMMENDATIONS[tier]),
        )
