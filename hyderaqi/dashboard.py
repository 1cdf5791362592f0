"""
Dashboard module for the HyderAQI dashboard core.

This module contains the AirQualityDashboard class, the orchestrator a
presentation shell talks to. It owns the station registry and the current
selection, requests insights when the selection changes, and resolves
search submissions against the registry first and through location
discovery second. The shell renders whatever state the dashboard exposes.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import pandas as pd

from .config import Settings, activity_logger
from .exceptions import InsightRequestError
from .health_insights import InsightResponse
from .insight_requestor import InsightRequestor
from .llm_service import LLMService
from .location_data import LocationData
from .location_discovery import LocationDiscovery
from .station_registry import StationRegistry
from .trend import build_trend

logger = logging.getLogger(__name__)


class SearchSource(Enum):
    REGISTRY = "registry"
    DISCOVERED = "discovered"
    NOT_FOUND = "not_found"
    EMPTY_QUERY = "empty_query"


@dataclass
class SearchOutcome:
    """
    Result of a search submission.

    Attributes:
        source: Where the location came from, or why there is none
        location: The selected location, None unless source is REGISTRY or DISCOVERED
        message: User-facing message for NOT_FOUND and EMPTY_QUERY, else None
    """

    source: SearchSource
    location: Optional[LocationData] = None
    message: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.location is not None


class AirQualityDashboard:
    """
    Orchestrates selection, insights and search for one dashboard session.

    Insight responses are tagged with a selection generation. A response that
    arrives after a newer selection has been made is discarded, so a slow
    reply for an old station can never overwrite the current view.
    """

    NOT_FOUND_MESSAGE = "Area not found or API error. Try 'Gachibowli' or 'Miyapur'."
    EMPTY_QUERY_MESSAGE = "Enter an area name to search."

    def __init__(
        self,
        registry: StationRegistry,
        insight_requestor: InsightRequestor,
        location_discovery: LocationDiscovery,
        activity_log: Optional[logging.Logger] = None,
    ):
        """
        Args:
            registry: The process-wide station registry (must not be empty)
            insight_requestor: Source of health insights
            location_discovery: Fallback for searches the registry cannot answer
            activity_log: Optional logger receiving one line per selection/search
        """
        if len(registry) == 0:
            raise ValueError("Dashboard needs at least one station")

        self.registry = registry
        self.insight_requestor = insight_requestor
        self.location_discovery = location_discovery
        self.activity_log = activity_log

        self.selected: LocationData = registry[0]
        self.insights: Optional[InsightResponse] = None
        self.insight_error: Optional[InsightRequestError] = None
        self.is_loading = False
        self.is_searching = False
        self._generation = 0

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        enable_activity_log: bool = False,
    ) -> "AirQualityDashboard":
        """Wires a dashboard with default stations and a shared LLM service."""
        settings = settings or Settings.from_env()
        llm_service = LLMService(settings=settings)
        return cls(
            registry=StationRegistry.with_defaults(),
            insight_requestor=InsightRequestor(llm_service, city=settings.city),
            location_discovery=LocationDiscovery(llm_service, city=settings.discovery_scope),
            activity_log=activity_logger(settings) if enable_activity_log else None,
        )

    def stations(self) -> tuple[LocationData, ...]:
        return self.registry.snapshot()

    def trend(self) -> pd.DataFrame:
        return build_trend(self.selected)

    async def refresh_insights(self) -> Optional[InsightResponse]:
        """Requests insights for the current selection (used on first load)."""
        return await self.select(self.selected)

    async def select(self, location: LocationData) -> Optional[InsightResponse]:
        """
        Makes ``location`` the selection and loads its insights.

        On failure the insights panel is cleared and the error is kept in
        ``insight_error``.

        Returns:
            The applied InsightResponse, or None if the request failed or was
            superseded by a newer selection
        """
        self._generation += 1
        generation = self._generation
        self.selected = location
        self.is_loading = True
        self._record("SELECT", location.id)

        try:
            insights = await self.insight_requestor.request_insights(location)
        except InsightRequestError as e:
            logger.error("Insights unavailable for %s: %s", location.id, e)
            if generation == self._generation:
                self.insights = None
                self.insight_error = e
            return None
        finally:
            if generation == self._generation:
                self.is_loading = False

        if generation != self._generation:
            logger.debug("Discarding stale insights for %s", location.id)
            return None

        self.insights = insights
        self.insight_error = None
        return insights

    async def search(self, query: str) -> SearchOutcome:
        """
        Resolves a search submission.

        Step 1: look for a station whose name contains the query.
        Step 2: on a miss, run location discovery; a found area is upserted
        to the front of the registry.
        Either way the found location becomes the selection, unless another
        selection was made while discovery was pending; the discovered area
        is still upserted then.

        Args:
            query: Text typed by the user

        Returns:
            SearchOutcome describing where the location came from
        """
        query = query.strip()
        if not query:
            return SearchOutcome(SearchSource.EMPTY_QUERY, message=self.EMPTY_QUERY_MESSAGE)

        local = self.registry.find_by_name_substring(query)
        if local is not None:
            self._record("SEARCH", f"{query!r} -> REGISTRY {local.id}")
            await self.select(local)
            return SearchOutcome(SearchSource.REGISTRY, location=local)

        generation = self._generation
        self.is_searching = True
        try:
            discovered = await self.location_discovery.discover(query)
        finally:
            self.is_searching = False

        if discovered is None:
            self._record("SEARCH", f"{query!r} -> NOT_FOUND")
            return SearchOutcome(SearchSource.NOT_FOUND, message=self.NOT_FOUND_MESSAGE)

        self.registry.upsert(discovered)
        self._record("SEARCH", f"{query!r} -> DISCOVERED {discovered.id}")
        if generation != self._generation:
            logger.info("Selection changed during search for %r, keeping it", query)
        else:
            await self.select(discovered)
        return SearchOutcome(SearchSource.DISCOVERED, location=discovered)

    def _record(self, action: str, detail: str) -> None:
        if self.activity_log is not None:
            self.activity_log.info("%-6s | %s | stations=%d", action, detail, len(self.registry))
