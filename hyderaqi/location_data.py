"""
Location data module for the HyderAQI dashboard core.

This module defines the LocationData dataclass, the record describing one
monitored area: its identity, AQI, stored status label, pollutant readings,
ambient conditions, coordinates and, for areas found through web-grounded
discovery, the source URLs backing the figures.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .aqi_classifier import AqiClassification, classify
from .pollutants import POLLUTANT_UNITS, Pollutants


@dataclass
class Coordinates:
    """Latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float


@dataclass
class LocationData:
    """
    A monitored area shown on the dashboard.

    The ``status`` label is stored as given when the record is created and is
    not recomputed if ``aqi`` changes later. Presentation tokens always come
    from ``classification``, which is derived from ``aqi`` on every read.

    Attributes:
        id: Unique key within the station registry
        name: Display name
        aqi: Air Quality Index (0-500+, unbounded above)
        status: Status label captured at creation time
        pollutants: The six pollutant readings
        temperature: Ambient temperature in Celsius
        humidity: Relative humidity in percent
        coordinates: Latitude/longitude of the area
        last_updated: When the readings were captured
        is_ai_generated: True only for records produced by location discovery
        sources: Provenance URLs for discovered records, empty otherwise
    """

    id: str
    name: str
    aqi: int
    status: str
    pollutants: Pollutants
    temperature: float
    humidity: float
    coordinates: Coordinates
    last_updated: datetime = field(default_factory=datetime.now)
    is_ai_generated: bool = False
    sources: list[str] = field(default_factory=list)

    @property
    def classification(self) -> AqiClassification:
        return classify(self.aqi)

    @property
    def last_updated_display(self) -> str:
        """Clock time of the last update, e.g. ``"02:41:07 PM"``."""
        return self.last_updated.strftime("%I:%M:%S %p")

    def is_status_consistent(self) -> bool:
        """
        Reports whether the stored status label matches the classifier.

        Discovered records carry whatever label the remote service returned,
        so this can be False even for freshly created records.
        """
        return self.status == self.classification.label

    def validate(self) -> tuple[bool, Optional[str]]:
        """
        Validates identity, readings and coordinates.

        Checks:
        - id and name must be non-empty
        - aqi, temperature, humidity and coordinates must be finite numbers
        - aqi must be non-negative
        - every pollutant reading must be non-negative
        - humidity must be between 0 and 100
        - latitude must be within [-90, 90], longitude within [-180, 180]

        Returns:
            A tuple containing:
            - bool: True if all validations pass, False otherwise
            - Optional[str]: None if valid, or a descriptive error message if invalid
        """
        if not self.id:
            return (False, "id must not be empty")

        if not self.name or not self.name.strip():
            return (False, "name must not be empty")

        numbers = {
            "aqi": self.aqi,
            "temperature": self.temperature,
            "humidity": self.humidity,
            "latitude": self.coordinates.lat,
            "longitude": self.coordinates.lng,
        }
        for name, value in numbers.items():
            if not math.isfinite(value):
                return (False, f"{name} must be a finite number")

        if self.aqi < 0:
            return (False, "aqi must be >= 0")

        valid, reason = self.pollutants.validate()
        if not valid:
            return (False, reason)

        if self.humidity < 0 or self.humidity > 100:
            return (False, "humidity must be between 0 and 100")

        if not -90 <= self.coordinates.lat <= 90:
            return (False, "latitude must be between -90 and 90")

        if not -180 <= self.coordinates.lng <= 180:
            return (False, "longitude must be between -180 and 180")

        return (True, None)

    def to_dict(self) -> dict[str, object]:
        """
        Converts the record to a JSON-serializable dictionary.

        Returns:
            Dictionary with all fields; the timestamp is ISO formatted and the
            derived presentation tokens are included for rendering.
        """
        classification = self.classification
        return {
            "id": self.id,
            "name": self.name,
            "aqi": self.aqi,
            "status": self.status,
            "pollutants": self.pollutants.to_dict(),
            "pollutant_units": dict(POLLUTANT_UNITS),
            "temperature": self.temperature,
            "humidity": self.humidity,
            "coordinates": {"lat": self.coordinates.lat, "lng": self.coordinates.lng},
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
            "is_ai_generated": self.is_ai_generated,
            "sources": list(self.sources),
            "presentation_token": classification.presentation_token,
            "color_token": classification.color_token,
        }
