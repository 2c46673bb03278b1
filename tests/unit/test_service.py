"""
Tests of zmanim_compare.service
"""

import asyncio
from typing import Dict, Optional

import httpx

from zmanim_compare.data import HebcalClient, NominatimGeocoder, ZmanimCache
from zmanim_compare.models.analysis import Relation
from zmanim_compare.models.config import ServiceConfig
from zmanim_compare.service import ZmanimService

PLACES = {
    "Jerusalem": ("31.7683", "35.2137"),
    "Lakewood": ("40.0821", "-74.2097"),
}

RESPONSES: Dict[str, dict] = {
    "31.7683": {
        "location": {"title": "Jerusalem", "tzid": "Asia/Jerusalem"},
        "times": {
            "sunset": {
                "2024-06-01": "2024-06-01T19:41:00+03:00",
                "2024-06-02": "2024-06-02T19:42:00+03:00",
            }
        },
    },
    "40.0821": {
        "location": {"title": "Lakewood", "tzid": "America/New_York"},
        "times": {
            "sunset": {
                "2024-06-01": "2024-06-01T20:20:00-04:00",
                "2024-06-02": "2024-06-02T20:21:00-04:00",
            }
        },
    },
}


def _build_service(calls: Dict[str, int], responses: Optional[Dict[str, dict]] = None) -> ZmanimService:
    responses = responses or RESPONSES

    def nominatim(request: httpx.Request) -> httpx.Response:
        query = request.url.params["q"].split(",")[0]
        if query not in PLACES:
            return httpx.Response(200, json=[])
        lat, lon = PLACES[query]
        return httpx.Response(200, json=[{"lat": lat, "lon": lon, "address": {"city": query}}])

    def hebcal(request: httpx.Request) -> httpx.Response:
        latitude = request.url.params["latitude"]
        calls[latitude] = calls.get(latitude, 0) + 1
        return httpx.Response(200, json=responses[latitude])

    config = ServiceConfig()
    return ZmanimService(
        config,
        hebcal=HebcalClient(config.hebcal, client=httpx.AsyncClient(transport=httpx.MockTransport(hebcal))),
        geocoder=NominatimGeocoder(
            config.geocoding,
            client=httpx.AsyncClient(transport=httpx.MockTransport(nominatim), base_url="https://nominatim.test"),
        ),
        cache=ZmanimCache(),
    )


def test_compare_locations():
    calls: Dict[str, int] = {}

    async def run():
        async with _build_service(calls) as service:
            return await service.compare(["Jerusalem", "Lakewood"], "2024-06-01", "2024-06-02", ["sunset"])

    report = asyncio.run(run())

    assert [fetch.success for fetch in report.fetches] == [True, True]
    assert report.analysis.locations == ("Jerusalem", "Lakewood")
    sunset = report.analysis["sunset"]
    assert sunset.relation(0, 1).relation is Relation.ALWAYS_EARLIER
    assert sunset.date_groups["2024-06-01"].entries[1].local_time == "8:20 PM"


def test_partial_failure_keeps_other_locations():
    calls: Dict[str, int] = {}

    async def run():
        async with _build_service(calls) as service:
            return await service.compare(["Atlantis", "Lakewood"], "2024-06-01", "2024-06-02", ["sunset"])

    report = asyncio.run(run())

    assert [fetch.success for fetch in report.fetches] == [False, True]
    assert [failure.query for failure in report.failures] == ["Atlantis"]
    assert "Location not found" in report.failures[0].error_message
    assert report.analysis.locations == ("Lakewood",)
    assert len(report.analysis["sunset"].date_groups) == 2


def test_repeat_lookups_use_cache():
    calls: Dict[str, int] = {}

    async def run():
        async with _build_service(calls) as service:
            await service.compare(["Jerusalem"], "2024-06-01", "2024-06-02")
            return await service.compare(["Jerusalem"], "2024-06-01", "2024-06-02")

    report = asyncio.run(run())

    assert calls == {"31.7683": 1}
    assert report.fetches[0].from_cache
    assert list(report.analysis.zmanim) == ["sunset"]


def test_coordinate_queries_are_labelled_as_typed():
    calls: Dict[str, int] = {}

    async def run():
        async with _build_service(calls) as service:
            return await service.fetch_all(["40.0821, -74.2097"], "2024-06-01", "2024-06-02")

    fetches = asyncio.run(run())

    assert fetches[0].success
    assert fetches[0].location.label == "40.0821, -74.2097"
    assert fetches[0].location.timezone == "America/New_York"


def test_unusable_times_are_excluded_not_coerced():
    calls: Dict[str, int] = {}
    responses = dict(RESPONSES)
    responses["31.7683"] = {
        "location": {"title": "Jerusalem", "tzid": "Asia/Jerusalem"},
        "times": {"sunset": {"2024-06-01": [1], "2024-06-02": 5}},
    }

    async def run():
        async with _build_service(calls, responses) as service:
            return await service.compare(["Jerusalem", "Lakewood"], "2024-06-01", "2024-06-02", ["sunset"])

    report = asyncio.run(run())

    assert [fetch.success for fetch in report.fetches] == [True, True]
    sunset = report.analysis["sunset"]
    assert [entry.location for entry in sunset.aggregation.entries] == ["Lakewood", "Lakewood"]
    assert sunset.overall.earliest.date == "2024-06-01"


def test_invalid_location_payload_fails_only_that_location():
    calls: Dict[str, int] = {}
    responses = dict(RESPONSES)
    responses["31.7683"] = {
        "location": {"title": "Jerusalem", "tzid": None, "latitude": "north"},
        "times": {"sunset": {"2024-06-01": "2024-06-01T19:41:00+03:00"}},
    }

    async def run():
        async with _build_service(calls, responses) as service:
            return await service.compare(["Jerusalem", "Lakewood"], "2024-06-01", "2024-06-02", ["sunset"])

    report = asyncio.run(run())

    assert [fetch.success for fetch in report.fetches] == [False, True]
    assert "Unexpected zmanim response" in report.failures[0].error_message
    assert report.analysis.locations == ("Lakewood",)
