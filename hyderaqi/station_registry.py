"""
Station registry module for the HyderAQI dashboard core.

This module contains the StationRegistry class, the ordered in-memory
collection of monitored areas. Order is display order: seed stations keep
their fixed relative order and upserted records move to the front. The
registry is an explicit object with one owner per process; nothing in this
package keeps a module-level station list.
"""

import logging
from typing import Iterable, Iterator, Optional

from .location_data import LocationData
from .stations import default_stations

logger = logging.getLogger(__name__)


class StationRegistry:
    """
    Ordered collection of LocationData records keyed by ``id``.

    Invariant: ids are unique at all times. Records are only ever removed by
    being replaced with a record carrying the same id.
    """

    def __init__(self, stations: Optional[Iterable[LocationData]] = None):
        """
        Initialize the registry.

        Args:
            stations: Initial records in display order. Used as the seed set
                      that ``reset()`` restores. Defaults to an empty registry.

        Raises:
            ValueError: If two initial records share an id
        """
        self._seed = list(stations or [])
        seen = set()
        for station in self._seed:
            if station.id in seen:
                raise ValueError(f"Duplicate station id: {station.id}")
            seen.add(station.id)
        self._stations: list[LocationData] = list(self._seed)

    @classmethod
    def with_defaults(cls) -> "StationRegistry":
        """Creates a registry seeded with the default Hyderabad stations."""
        return cls(default_stations())

    def find_by_name_substring(self, query: str) -> Optional[LocationData]:
        """
        Finds the first station whose name contains ``query``, ignoring case.

        When several names match, the first one in current display order is
        returned; there is no ranking or disambiguation.

        Args:
            query: Free-text search string

        Returns:
            The matching LocationData, or None if no name contains the query
        """
        needle = query.lower()
        for station in self._stations:
            if needle in station.name.lower():
                return station
        return None

    def upsert(self, record: LocationData) -> None:
        """
        Inserts a record at the front, replacing any record with the same id.

        Args:
            record: The record to insert or refresh
        """
        replaced = self.get(record.id) is not None
        self._stations = [record] + [s for s in self._stations if s.id != record.id]
        logger.debug("%s station %s at front of registry",
                     "Replaced" if replaced else "Inserted", record.id)

    def get(self, station_id: str) -> Optional[LocationData]:
        for station in self._stations:
            if station.id == station_id:
                return station
        return None

    def snapshot(self) -> tuple[LocationData, ...]:
        """Returns the current records in display order."""
        return tuple(self._stations)

    def reset(self) -> None:
        """Restores the seed set, dropping every upserted record."""
        self._stations = list(self._seed)

    def __len__(self) -> int:
        return len(self._stations)

    def __iter__(self) -> Iterator[LocationData]:
        return iter(self.snapshot())

    def __getitem__(self, index: int) -> LocationData:
        return self._stations[index]

    def __contains__(self, station_id: object) -> bool:
        return any(s.id == station_id for s in self._stations)
