"""
HyderAQI: core library of an air-quality dashboard for Hyderabad.

Classifies AQI values, keeps the station registry, and asks Gemini for
health insights and for web-grounded discovery of new areas.
"""

from .aqi_classifier import AqiClassification, AqiTier, classify
from .dashboard import AirQualityDashboard, SearchOutcome, SearchSource
from .health_insights import HealthInsight, InsightResponse
from .insight_requestor import InsightRequestor
from .llm_service import LLMService
from .location_data import Coordinates, LocationData
from .location_discovery import LocationDiscovery
from .pollutants import Pollutants
from .service_result import ResultStatus, ServiceResult
from .station_registry import StationRegistry

__all__ = [
    "AirQualityDashboard",
    "AqiClassification",
    "AqiTier",
    "Coordinates",
    "HealthInsight",
    "InsightRequestor",
    "InsightResponse",
    "LLMService",
    "LocationData",
    "LocationDiscovery",
    "Pollutants",
    "ResultStatus",
    "SearchOutcome",
    "SearchSource",
    "ServiceResult",
    "StationRegistry",
    "classify",
]
