"""
Tests for LocationDiscovery component.

Tests cover:
- Prompt construction and grounded request
- Default filling: each optional field, explicit zeros kept
- Record building: id, flags, sources, timestamp, name fallback
- Error scenarios: remote error, malformed JSON, missing or mistyped fields,
  invalid or non-finite values, mock mode; all become None without raising
- Rounding: fractional AQI rounds half up
"""

import asyncio
import json
from datetime import datetime

import pytest

from conftest import fake_response, make_gemini_service
from hyderaqi.exceptions import SchemaValidationError
from hyderaqi.location_discovery import (
    DISCOVERY_SCHEMA,
    OPTIONAL_FIELD_DEFAULTS,
    DiscoveredArea,
    LocationDiscovery,
    SearchIdFactory,
)
from hyderaqi.service_result import ResultStatus

NOW = datetime(2026, 10, 19, 16, 45, 0)

FULL_PAYLOAD = {
    "name": "Kondapur",
    "aqi": 96,
    "status": "Moderate",
    "pm25": 34,
    "pm10": 70,
    "no2": 22,
    "so2": 6,
    "co": 0.9,
    "o3": 38,
    "temp": 32,
    "humidity": 48,
    "lat": 17.4615,
    "lng": 78.3562,
}

REQUIRED_ONLY = {k: FULL_PAYLOAD[k] for k in ("name", "aqi", "status", "pm25", "pm10", "lat", "lng")}


def make_discovery(response=None, error=None):
    service = make_gemini_service(response, error)
    return LocationDiscovery(service, id_factory=lambda: "searched-123", clock=lambda: NOW)


class TestDiscoveredArea:
    """Test suite for payload parsing and default filling."""

    @pytest.mark.parametrize("field, default", sorted(OPTIONAL_FIELD_DEFAULTS.items()))
    def test_missing_optional_field_gets_default(self, field, default):
        payload = {k: v for k, v in FULL_PAYLOAD.items() if k != field}
        area = DiscoveredArea.from_payload(payload).with_defaults()
        assert getattr(area, field) == default

    @pytest.mark.parametrize("field, default", sorted(OPTIONAL_FIELD_DEFAULTS.items()))
    def test_null_optional_field_gets_default(self, field, default):
        payload = dict(FULL_PAYLOAD, **{field: None})
        area = DiscoveredArea.from_payload(payload).with_defaults()
        assert getattr(area, field) == default

    def test_defaults_values(self):
        area = DiscoveredArea.from_payload(REQUIRED_ONLY).with_defaults()
        assert (area.no2, area.so2, area.co, area.o3, area.temp, area.humidity) == (15, 5, 0.8, 40, 30, 50)

    def test_explicit_zero_is_kept(self):
        area = DiscoveredArea.from_payload(dict(FULL_PAYLOAD, so2=0)).with_defaults()
        assert area.so2 == 0

    def test_present_values_untouched(self):
        area = DiscoveredArea.from_payload(FULL_PAYLOAD).with_defaults()
        assert area.no2 == 22
        assert area.humidity == 48

    def test_with_defaults_is_pure(self):
        area = DiscoveredArea.from_payload(REQUIRED_ONLY)
        area.with_defaults()
        assert area.no2 is None

    @pytest.mark.parametrize("field", ["name", "aqi", "status", "pm25", "pm10", "lat", "lng"])
    def test_missing_required_field_rejected(self, field):
        payload = {k: v for k, v in FULL_PAYLOAD.items() if k != field}
        with pytest.raises(SchemaValidationError):
            DiscoveredArea.from_payload(payload)

    def test_non_numeric_field_rejected(self):
        with pytest.raises(SchemaValidationError):
            DiscoveredArea.from_payload(dict(FULL_PAYLOAD, pm25="high"))

    def test_boolean_is_not_a_number(self):
        with pytest.raises(SchemaValidationError):
            DiscoveredArea.from_payload(dict(FULL_PAYLOAD, o3=True))

    @pytest.mark.parametrize("field, value", [
        ("aqi", float("nan")),
        ("aqi", float("inf")),
        ("pm25", float("nan")),
        ("humidity", float("-inf")),
    ])
    def test_non_finite_number_rejected(self, field, value):
        with pytest.raises(SchemaValidationError):
            DiscoveredArea.from_payload(dict(FULL_PAYLOAD, **{field: value}))


class TestLocationDiscovery:
    """Test suite for discover() against a mocked grounded response."""

    def test_prompt_names_area_and_city(self):
        prompt = make_discovery().build_prompt("Kondapur")
        assert '"Kondapur"' in prompt
        assert "Hyderabad, India" in prompt
        for fragment in ("AQI", "PM2.5", "PM10", "temperature", "humidity", "coordinates"):
            assert fragment in prompt

    def test_grounded_request_with_schema(self):
        discovery = make_discovery(fake_response(FULL_PAYLOAD))
        asyncio.run(discovery.discover("Kondapur"))

        call = discovery.llm_service._client.aio.models.generate_content.call_args
        assert call.kwargs["contents"] == discovery.build_prompt("Kondapur")
        assert call.kwargs["config"].response_schema == DISCOVERY_SCHEMA
        assert call.kwargs["config"].tools[0].google_search is not None

    def test_builds_ai_generated_record(self):
        urls = ["https://aqi.example/kondapur", None, "https://news.example/hyd"]
        discovery = make_discovery(fake_response(FULL_PAYLOAD, urls=urls))
        location = asyncio.run(discovery.discover("kondapur"))

        assert location is not None
        assert location.id == "searched-123"
        assert location.name == "Kondapur"
        assert location.aqi == 96
        assert location.status == "Moderate"
        assert location.pollutants.pm25 == 34
        assert location.pollutants.co == 0.9
        assert location.temperature == 32
        assert location.coordinates.lat == 17.4615
        assert location.is_ai_generated is True
        assert location.sources == ["https://aqi.example/kondapur", "https://news.example/hyd"]
        assert location.last_updated == NOW

    def test_missing_no2_defaults_to_15(self):
        payload = {k: v for k, v in FULL_PAYLOAD.items() if k != "no2"}
        location = asyncio.run(make_discovery(fake_response(payload)).discover("Kondapur"))
        assert location.pollutants.no2 == 15

    def test_required_only_payload_uses_all_defaults(self):
        location = asyncio.run(make_discovery(fake_response(REQUIRED_ONLY)).discover("Kondapur"))
        p = location.pollutants
        assert (p.no2, p.so2, p.co, p.o3) == (15, 5, 0.8, 40)
        assert location.temperature == 30
        assert location.humidity == 50

    def test_no_grounding_gives_empty_sources(self):
        location = asyncio.run(make_discovery(fake_response(FULL_PAYLOAD)).discover("Kondapur"))
        assert location.sources == []

    def test_blank_name_falls_back_to_query(self):
        payload = dict(FULL_PAYLOAD, name="  ")
        location = asyncio.run(make_discovery(fake_response(payload)).discover("Miyapur"))
        assert location.name == "Miyapur"

    def test_fractional_aqi_rounded(self):
        location = asyncio.run(make_discovery(fake_response(dict(FULL_PAYLOAD, aqi=96.6))).discover("Kondapur"))
        assert location.aqi == 97

    @pytest.mark.parametrize("aqi, expected", [(96.5, 97), (97.5, 98), (96.4, 96), (0.5, 1)])
    def test_half_aqi_rounds_up(self, aqi, expected):
        payload = dict(FULL_PAYLOAD, aqi=aqi)
        location = asyncio.run(make_discovery(fake_response(payload)).discover("Kondapur"))
        assert location.aqi == expected

    def test_remote_status_label_kept_verbatim(self):
        payload = dict(FULL_PAYLOAD, status="Satisfactory")
        location = asyncio.run(make_discovery(fake_response(payload)).discover("Kondapur"))
        assert location.status == "Satisfactory"
        assert location.classification.label == "Moderate"

    # ==================== Error Scenarios ====================

    def test_remote_error_returns_none(self):
        assert asyncio.run(make_discovery(error=RuntimeError("quota exceeded")).discover("Kondapur")) is None

    def test_malformed_json_returns_none(self):
        assert asyncio.run(make_discovery(fake_response(text="not json")).discover("Kondapur")) is None

    def test_missing_required_field_returns_none(self):
        payload = {k: v for k, v in FULL_PAYLOAD.items() if k != "lat"}
        assert asyncio.run(make_discovery(fake_response(payload)).discover("Kondapur")) is None

    def test_invalid_coordinates_returns_none(self):
        payload = dict(FULL_PAYLOAD, lat=178.4)
        assert asyncio.run(make_discovery(fake_response(payload)).discover("Kondapur")) is None

    def test_mock_mode_returns_none(self, mock_llm_service):
        discovery = LocationDiscovery(mock_llm_service)
        assert asyncio.run(discovery.discover("Kondapur")) is None

    def test_mock_mode_lookup_is_not_found(self, mock_llm_service):
        result = asyncio.run(LocationDiscovery(mock_llm_service).lookup("Kondapur"))
        assert result.status is ResultStatus.NOT_FOUND
        assert result.error is None

    def test_unexpected_exception_returns_none(self):
        discovery = make_discovery(fake_response(FULL_PAYLOAD))

        def broken_id_factory():
            raise KeyError("boom")

        discovery.id_factory = broken_id_factory
        assert asyncio.run(discovery.discover("Kondapur")) is None

    def test_lookup_reports_failure(self):
        result = asyncio.run(make_discovery(fake_response(text="{}")).lookup("Kondapur"))
        assert result.status is ResultStatus.FAILURE
        assert isinstance(result.error, SchemaValidationError)


class TestSearchIdFactory:
    """Test suite for the time-based id generator."""

    def test_prefix(self):
        assert SearchIdFactory()().startswith("searched-")

    def test_ids_unique_and_increasing(self):
        factory = SearchIdFactory()
        stamps = [int(factory().split("-")[1]) for _ in range(50)]
        assert stamps == sorted(stamps)
        assert len(set(stamps)) == 50


class TestOutOfDomainResponses:
    """
    Test suite for well-formed JSON carrying values no reading can have.

    Python's json module accepts the NaN and Infinity literals, so these reach
    the parser as floats.
    """

    NAN_AQI_TEXT = json.dumps(FULL_PAYLOAD).replace('"aqi": 96', '"aqi": NaN')
    INFINITY_AQI_TEXT = json.dumps(FULL_PAYLOAD).replace('"aqi": 96', '"aqi": Infinity')
    NAN_PM25_TEXT = json.dumps(FULL_PAYLOAD).replace('"pm25": 34', '"pm25": NaN')

    CASES = [
        pytest.param(fake_response(text=NAN_AQI_TEXT), id="nan-aqi"),
        pytest.param(fake_response(text=INFINITY_AQI_TEXT), id="infinity-aqi"),
        pytest.param(fake_response(text=NAN_PM25_TEXT), id="nan-pm25"),
        pytest.param(fake_response(dict(FULL_PAYLOAD, aqi=-3)), id="negative-aqi"),
        pytest.param(fake_response(dict(FULL_PAYLOAD, pm10=-1)), id="negative-pollutant"),
        pytest.param(fake_response(dict(FULL_PAYLOAD, humidity=101)), id="humidity-over-100"),
    ]

    @pytest.mark.parametrize("response", CASES)
    def test_discover_returns_none(self, response):
        assert asyncio.run(make_discovery(response).discover("Kondapur")) is None

    @pytest.mark.parametrize("response", CASES)
    def test_lookup_reports_failure(self, response):
        result = asyncio.run(make_discovery(response).lookup("Kondapur"))
        assert result.status is ResultStatus.FAILURE
        assert isinstance(result.error, SchemaValidationError)
