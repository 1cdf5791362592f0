"""
Location discovery module for the HyderAQI dashboard core.

This module contains the LocationDiscovery class which looks up an area that
is not in the station registry by asking the LLM service for a web-grounded
answer. The response is parsed as a partial record, missing optional
readings are filled with fixed fallback values, and the result becomes a
LocationData flagged as AI-generated and carrying its source URLs.

Discovery is best-effort: ``discover()`` turns every failure into None.
"""

import logging
import math
import time
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Callable, Optional

from google.genai import types

from .exceptions import HyderAQIError, SchemaValidationError
from .llm_service import LLMService
from .location_data import Coordinates, LocationData
from .pollutants import Pollutants
from .service_result import ResultStatus, ServiceResult

logger = logging.getLogger(__name__)


# Fallback values for optional fields. These are not estimates.
OPTIONAL_FIELD_DEFAULTS = {
    "no2": 15,
    "so2": 5,
    "co": 0.8,
    "o3": 40,
    "temp": 30,
    "humidity": 50,
}

REQUIRED_FIELDS = ("name", "aqi", "status", "pm25", "pm10", "lat", "lng")

_NUMBER = types.Schema(type=types.Type.NUMBER)

DISCOVERY_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "name": types.Schema(type=types.Type.STRING),
        "aqi": _NUMBER,
        "status": types.Schema(type=types.Type.STRING),
        "pm25": _NUMBER,
        "pm10": _NUMBER,
        "no2": _NUMBER,
        "so2": _NUMBER,
        "co": _NUMBER,
        "o3": _NUMBER,
        "temp": _NUMBER,
        "humidity": _NUMBER,
        "lat": _NUMBER,
        "lng": _NUMBER,
    },
    required=list(REQUIRED_FIELDS),
)


def _is_number(value: Any) -> bool:
    # json.loads accepts NaN and Infinity; neither is a reading
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def round_half_up(value: float) -> int:
    """Rounds to the nearest integer with .5 going up (96.5 -> 97)."""
    return math.floor(value + 0.5)


@dataclass
class DiscoveredArea:
    """
    Partial area record as returned by the discovery prompt.

    Optional readings are None when the service left them out.
    """

    name: str
    aqi: float
    status: str
    pm25: float
    pm10: float
    lat: float
    lng: float
    no2: Optional[float] = None
    so2: Optional[float] = None
    co: Optional[float] = None
    o3: Optional[float] = None
    temp: Optional[float] = None
    humidity: Optional[float] = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "DiscoveredArea":
        """
        Parses a decoded discovery response.

        Raises:
            SchemaValidationError: If a required field is missing or null, or
                any present field has the wrong type or is not finite
        """
        missing = [key for key in REQUIRED_FIELDS if payload.get(key) is None]
        if missing:
            raise SchemaValidationError(f"Discovery response missing fields: {', '.join(missing)}")

        for key in ("name", "status"):
            if not isinstance(payload[key], str):
                raise SchemaValidationError(f"Discovery field '{key}' must be a string")

        numeric_keys = [k for k in REQUIRED_FIELDS if k not in ("name", "status")]
        numeric_keys += list(OPTIONAL_FIELD_DEFAULTS)
        for key in numeric_keys:
            value = payload.get(key)
            if value is not None and not _is_number(value):
                raise SchemaValidationError(f"Discovery field '{key}' must be a number")

        return cls(
            name=payload["name"],
            aqi=payload["aqi"],
            status=payload["status"],
            pm25=payload["pm25"],
            pm10=payload["pm10"],
            lat=payload["lat"],
            lng=payload["lng"],
            **{key: payload.get(key) for key in OPTIONAL_FIELD_DEFAULTS},
        )

    def with_defaults(self) -> "DiscoveredArea":
        """
        Returns a copy with every missing optional reading set to its fallback.

        Only None is replaced; an explicit 0 is kept.
        """
        filled = {
            key: default
            for key, default in OPTIONAL_FIELD_DEFAULTS.items()
            if getattr(self, key) is None
        }
        return replace(self, **filled)


class SearchIdFactory:
    """
    Generates ``searched-<epoch ms>`` ids, strictly increasing per instance.

    Two calls in the same millisecond get consecutive values.
    """

    def __init__(self, prefix: str = "searched"):
        self.prefix = prefix
        self._last = 0

    def __call__(self) -> str:
        stamp = max(int(time.time() * 1000), self._last + 1)
        self._last = stamp
        return f"{self.prefix}-{stamp}"


class LocationDiscovery:
    """
    Finds areas outside the registry through a web-grounded LLM query.
    """

    def __init__(
        self,
        llm_service: LLMService,
        city: str = "Hyderabad, India",
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            llm_service: Gateway to the remote model
            city: Scope appended to every search, matching the seed stations' city
            id_factory: Produces ids for new records (time-based by default)
            clock: Returns the creation time for new records (datetime.now by default)
        """
        self.llm_service = llm_service
        self.city = city
        self.id_factory = id_factory or SearchIdFactory()
        self.clock = clock or datetime.now

    def build_prompt(self, query: str) -> str:
        return (
            f"Find the latest real-time Air Quality Index (AQI), PM2.5, PM10, temperature, "
            f"humidity, and coordinates for the specific area: \"{query}\" in {self.city}. "
            f"Return only the data for this neighborhood."
        )

    def build_location(self, query: str, area: DiscoveredArea, sources: list[str]) -> LocationData:
        """
        Turns a parsed area into a LocationData record.

        Args:
            query: The user's search text, used as the name if the service returned a blank one
            area: Parsed area; defaults are applied here
            sources: Grounding URLs for the record

        Raises:
            SchemaValidationError: If the resulting record fails validation
        """
        area = area.with_defaults()
        location = LocationData(
            id=self.id_factory(),
            name=area.name.strip() or query,
            aqi=round_half_up(area.aqi),
            status=area.status,
            pollutants=Pollutants(
                pm25=area.pm25,
                pm10=area.pm10,
                no2=area.no2,
                so2=area.so2,
                co=area.co,
                o3=area.o3,
            ),
            temperature=area.temp,
            humidity=area.humidity,
            coordinates=Coordinates(lat=area.lat, lng=area.lng),
            last_updated=self.clock(),
            is_ai_generated=True,
            sources=list(sources),
        )

        valid, reason = location.validate()
        if not valid:
            raise SchemaValidationError(f"Discovered location is invalid: {reason}")
        return location

    async def lookup(self, query: str) -> ServiceResult[LocationData]:
        """
        Runs discovery and reports the outcome as a tagged result.

        Returns:
            ServiceResult.success with the new record,
            ServiceResult.not_found when the LLM service runs in mock mode
            (there is no web search offline), or ServiceResult.failure
        """
        if not self.llm_service.is_live:
            return ServiceResult.not_found()

        try:
            response = await self.llm_service.generate_structured(
                self.build_prompt(query), DISCOVERY_SCHEMA, grounded=True
            )
            area = DiscoveredArea.from_payload(response.payload)
            location = self.build_location(query, area, response.source_urls)
        except HyderAQIError as e:
            return ServiceResult.failure(e)

        logger.info("Discovered %s (%s) with %d source(s)",
                    location.name, location.id, len(location.sources))
        return ServiceResult.success(location)

    async def discover(self, query: str) -> Optional[LocationData]:
        """
        Returns a new record for ``query``, or None if discovery failed for any reason.

        Never raises.
        """
        try:
            result = await self.lookup(query)
        except Exception as e:
            result = ServiceResult.failure(e)

        if result.status is ResultStatus.FAILURE:
            logger.error("Failed to fetch search data for %r: %s", query, result.error)
        elif result.status is ResultStatus.NOT_FOUND:
            logger.info("Discovery unavailable in %s mode, %r not found", self.llm_service.mode, query)
        return result.value_or_none()
