"""
Tests of zmanim_compare.cli.main
"""

import json

import pytest
from typer.testing import CliRunner

from zmanim_compare.cli import main as cli
from zmanim_compare.core.analyzer import ZmanimAnalyzer
from zmanim_compare.models.location import LocationDataset
from zmanim_compare.service import ComparisonReport, LocationFetchResult

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    # Keep handlers off the runner's temporary streams
    monkeypatch.setattr(cli, "_setup_logging", lambda log_level, json_logs=False: None)


@pytest.fixture
def fake_compare(monkeypatch, week_dataset):
    captured = {}

    async def _run_compare(config, queries, start_date, end_date, zmanim):
        captured.update(queries=queries, start_date=start_date, end_date=end_date, zmanim=zmanim)
        fetches = [
            LocationFetchResult(query=query, index=index, success=True, location=location)
            for index, (query, location) in enumerate(zip(queries, week_dataset.locations))
        ]
        fetches.append(
            LocationFetchResult(query="Nowhere", index=len(fetches), success=False, error_message="Location not found")
        )
        dataset = LocationDataset.of([fetch.location for fetch in fetches if fetch.success])
        return ComparisonReport(
            start_date=start_date,
            end_date=end_date,
            fetches=fetches,
            analysis=ZmanimAnalyzer().analyze(dataset, zmanim),
        )

    monkeypatch.setattr(cli, "_run_compare", _run_compare)
    return captured


def test_compare_tsv(fake_compare):
    result = runner.invoke(
        cli.app,
        ["compare", "A", "B", "--start", "2024-06-01", "--end", "2024-06-05", "-z", "sunrise", "--format", "tsv"],
    )

    assert result.exit_code == 0, result.output
    assert fake_compare == {
        "queries": ["A", "B"],
        "start_date": "2024-06-01",
        "end_date": "2024-06-05",
        "zmanim": ["sunrise"],
    }
    assert "Date\tLocation\tSunrise" in result.output
    assert "2024-06-01\tA\t5:21 AM" in result.output


def test_compare_summary(fake_compare):
    result = runner.invoke(
        cli.app,
        ["compare", "A", "B", "--start", "2024-06-01", "--end", "2024-06-05", "-z", "sunrise", "-f", "summary"],
    )

    assert result.exit_code == 0, result.output
    assert "A is always earlier than B" in result.output


def test_compare_json(fake_compare):
    result = runner.invoke(
        cli.app,
        ["compare", "A", "B", "--start", "2024-06-01", "-z", "sunrise", "-f", "json"],
    )

    assert result.exit_code == 0, result.output
    start = result.output.index("{")
    payload = json.loads(result.output[start:])
    assert payload["locations"] == ["A", "B"]
    assert fake_compare["end_date"] == "2024-06-01"


def test_compare_default_zmanim(fake_compare):
    result = runner.invoke(cli.app, ["compare", "A", "B", "--start", "2024-06-01"])

    assert result.exit_code == 0, result.output
    assert fake_compare["zmanim"] == ["sunrise", "sunset", "chatzot"]


def test_compare_rejects_bad_dates(fake_compare):
    result = runner.invoke(cli.app, ["compare", "A", "--start", "June first"])

    assert result.exit_code == 1
    assert fake_compare == {}


def test_compare_rejects_reversed_range(fake_compare):
    result = runner.invoke(cli.app, ["compare", "A", "--start", "2024-06-05", "--end", "2024-06-01"])

    assert result.exit_code == 1


def test_list_zmanim():
    result = runner.invoke(cli.app, ["zmanim"])

    assert result.exit_code == 0
    assert "alotHaShachar" in result.output
    assert "tzeit72min" in result.output
