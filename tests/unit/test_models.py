"""
Tests of zmanim_compare.models
"""

import pytest
from pydantic import ValidationError

from zmanim_compare.models.location import LocationData, LocationDataset
from zmanim_compare.models.zman import (
    ZMANIM_OPTIONS,
    ZmanCategory,
    get_zman_category,
    get_zman_label,
    sort_zmanim,
)


def test_zmanim_options_categories():
    by_category = {}
    for option in ZMANIM_OPTIONS:
        by_category.setdefault(option.category, []).append(option.id)

    assert by_category[ZmanCategory.MORNING] == [
        "alotHaShachar",
        "misheyakir",
        "sunrise",
        "sofZmanShma",
        "sofZmanTfilla",
    ]
    assert by_category[ZmanCategory.AFTERNOON] == ["chatzot", "minchaGedola", "minchaKetana", "plagHaMincha"]
    assert by_category[ZmanCategory.EVENING] == ["sunset"]
    assert by_category[ZmanCategory.NIGHT] == ["tzeit42min", "tzeit72min"]


@pytest.mark.parametrize(
    "zman_id, label",
    (
        pytest.param("sofZmanShma", "Sof Zman Shma", id="known"),
        pytest.param("tzeit72min", "Tzeit 72 min", id="night"),
        pytest.param("candleLighting", "candleLighting", id="unknown"),
    ),
)
def test_get_zman_label(zman_id, label):
    assert get_zman_label(zman_id) == label


def test_get_zman_category_unknown():
    assert get_zman_category("sunset") is ZmanCategory.EVENING
    assert get_zman_category("dusk") is None


def test_sort_zmanim():
    assert sort_zmanim(["sunset", "mystery", "sunrise", "alotHaShachar", "other"]) == [
        "alotHaShachar",
        "sunrise",
        "sunset",
        "mystery",
        "other",
    ]


def test_location_from_hebcal():
    payload = {
        "date": {"start": "2024-06-01", "end": "2024-06-02"},
        "location": {
            "title": "Jerusalem, Israel",
            "tzid": "Asia/Jerusalem",
            "latitude": 31.76904,
            "longitude": 35.21633,
        },
        "times": {
            "sunrise": {"2024-06-01": "2024-06-01T05:33:00+03:00", "2024-06-02": None},
            "bogus": "not a mapping",
        },
    }

    location = LocationData.from_hebcal(payload, label="Jerusalem")

    assert location.label == "Jerusalem"
    assert location.timezone == "Asia/Jerusalem"
    assert location.latitude == pytest.approx(31.76904)
    assert location.times == {"sunrise": {"2024-06-01": "2024-06-01T05:33:00+03:00", "2024-06-02": None}}


def test_location_from_hebcal_uses_title_without_label():
    location = LocationData.from_hebcal({"location": {"title": "Here", "tzid": "UTC"}, "times": {}})

    assert location.label == "Here"


def test_location_keeps_raw_values_uncoerced():
    location = LocationData.from_hebcal(
        {"location": {"tzid": "UTC"}, "times": {"sunset": {"2024-06-01": 5, "2024-06-02": [1]}}},
        label="Here",
    )

    assert location.times["sunset"] == {"2024-06-01": 5, "2024-06-02": [1]}


def test_dataset_records_and_dates(week_dataset):
    records = list(week_dataset.records("sunrise"))

    assert len(records) == 10
    assert records[0].location == "A"
    assert records[0].timezone == "Asia/Jerusalem"
    assert records[-1].location_index == 1
    assert week_dataset.dates() == [f"2024-06-0{day}" for day in range(1, 6)]
    assert week_dataset.dates(["sunset"]) == []
    assert week_dataset.labels == ["A", "B"]


def test_dataset_is_frozen(week_dataset):
    with pytest.raises(ValidationError):
        week_dataset.locations = ()
