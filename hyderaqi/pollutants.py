"""
Pollutants module for the HyderAQI dashboard core.

Defines the Pollutants dataclass holding the six pollutant readings shown on
every station card, along with the display unit of each reading.
"""

import math
from dataclasses import dataclass, asdict, fields
from typing import Optional


# Display units per pollutant field
POLLUTANT_UNITS = {
    "pm25": "µg/m³",
    "pm10": "µg/m³",
    "no2": "µg/m³",
    "so2": "µg/m³",
    "co": "mg/m³",
    "o3": "µg/m³",
}

POLLUTANT_LABELS = {
    "pm25": "PM2.5",
    "pm10": "PM10",
    "no2": "NO2",
    "so2": "SO2",
    "co": "CO",
    "o3": "O3",
}


@dataclass
class Pollutants:
    """
    Pollutant concentrations for one monitored area.

    Attributes:
        pm25: Fine particulate matter (µg/m³)
        pm10: Coarse particulate matter (µg/m³)
        no2: Nitrogen dioxide (µg/m³)
        so2: Sulfur dioxide (µg/m³)
        co: Carbon monoxide (mg/m³)
        o3: Ozone (µg/m³)
    """

    pm25: float
    pm10: float
    no2: float
    so2: float
    co: float
    o3: float

    def validate(self) -> tuple[bool, Optional[str]]:
        """
        Checks that every reading is a finite, non-negative number.

        Returns:
            (True, None) if valid, otherwise (False, message naming the field)
        """
        for field in fields(self):
            value = getattr(self, field.name)
            if not math.isfinite(value):
                return (False, f"{field.name} must be a finite number")
            if value < 0:
                return (False, f"{field.name} must be >= 0")
        return (True, None)

    def readings(self) -> list[tuple[str, float, str]]:
        """
        Returns (label, value, unit) for each pollutant in card order.

        e.g. ``("PM2.5", 28, "µg/m³")``
        """
        return [
            (POLLUTANT_LABELS[field.name], getattr(self, field.name), POLLUTANT_UNITS[field.name])
            for field in fields(self)
        ]

    def to_dict(self) -> dict[str, float]:
        return asdict(self)
