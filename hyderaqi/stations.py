"""
Default monitoring stations for Hyderabad.

The readings are static demo values. ``default_stations()`` builds fresh
records on every call, stamped with the current time, so registries never
share record instances.
"""

from datetime import datetime
from typing import Optional

from .location_data import Coordinates, LocationData
from .pollutants import Pollutants


def default_stations(now: Optional[datetime] = None) -> list[LocationData]:
    """Returns the four seed stations in display order."""
    now = now or datetime.now()
    return [
        LocationData(
            id="gachibowli",
            name="Gachibowli (IT Corridor)",
            aqi=82,
            status="Moderate",
            pollutants=Pollutants(pm25=28, pm10=55, no2=18, so2=5, co=0.8, o3=42),
            temperature=31,
            humidity=45,
            coordinates=Coordinates(lat=17.4401, lng=78.3489),
            last_updated=now,
        ),
        LocationData(
            id="charminar",
            name="Charminar (Old City)",
            aqi=145,
            status="Unhealthy for Sensitive Groups",
            pollutants=Pollutants(pm25=58, pm10=110, no2=32, so2=12, co=1.5, o3=35),
            temperature=33,
            humidity=40,
            coordinates=Coordinates(lat=17.3616, lng=78.4747),
            last_updated=now,
        ),
        LocationData(
            id="jubilee-hills",
            name="Jubilee Hills",
            aqi=65,
            status="Moderate",
            pollutants=Pollutants(pm25=19, pm10=42, no2=12, so2=4, co=0.6, o3=48),
            temperature=29,
            humidity=50,
            coordinates=Coordinates(lat=17.4284, lng=78.4120),
            last_updated=now,
        ),
        LocationData(
            id="punjagutta",
            name="Punjagutta Traffic Hub",
            aqi=188,
            status="Unhealthy",
            pollutants=Pollutants(pm25=125, pm10=210, no2=45, so2=15, co=2.2, o3=28),
            temperature=34,
            humidity=38,
            coordinates=Coordinates(lat=17.4265, lng=78.4523),
            last_updated=now,
        ),
    ]
