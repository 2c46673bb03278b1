"""
Shared fixtures for the zmanim comparison tests
"""

from typing import Dict, Optional

import pytest

from zmanim_compare.models.location import LocationData, LocationDataset


def _location(label: str, timezone: str, times: Dict[str, Dict[str, Optional[str]]]) -> LocationData:
    return LocationData(label=label, timezone=timezone, times=times)


@pytest.fixture
def make_location():
    """Factory for single locations: make_location(label, timezone, times)."""
    return _location


@pytest.fixture
def sunset_dataset() -> LocationDataset:
    """Three locations in one zone with sunsets at 19:58, 20:05 and 20:12."""
    return LocationDataset.of(
        [
            _location(
                "Middle",
                "America/New_York",
                {"sunset": {"2024-06-01": "2024-06-01T20:05:00-04:00"}},
            ),
            _location(
                "Late",
                "America/New_York",
                {"sunset": {"2024-06-01": "2024-06-01T20:12:00-04:00"}},
            ),
            _location(
                "Early",
                "America/New_York",
                {"sunset": {"2024-06-01": "2024-06-01T19:58:00-04:00"}},
            ),
        ]
    )


@pytest.fixture
def week_dataset() -> LocationDataset:
    """Two locations over five days, A always ten minutes before B."""
    a_times = {}
    b_times = {}
    for day in range(1, 6):
        date = f"2024-06-0{day}"
        a_times[date] = f"{date}T05:{20 + day:02d}:00+03:00"
        b_times[date] = f"{date}T05:{30 + day:02d}:00+03:00"
    return LocationDataset.of(
        [
            _location("A", "Asia/Jerusalem", {"sunrise": a_times}),
            _location("B", "Asia/Jerusalem", {"sunrise": b_times}),
        ]
    )
