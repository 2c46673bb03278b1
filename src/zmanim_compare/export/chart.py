"""Series data for plotting zman times across dates."""

import math
from typing import List, Tuple
from pydantic import BaseModel

from ..models.analysis import AnalysisResult
from ..core.timezone_utils import hours_of_day


class ChartSeries(BaseModel):
    """One line: a zman at a location, local hours by date."""
    name: str
    zman_id: str
    location: str
    points: Tuple[Tuple[str, float], ...] = ()


def build_chart_series(result: AnalysisResult) -> List[ChartSeries]:
    """Series per zman and location, times in each location's own zone."""
    series = []
    for zman_id, analysis in result.zmanim.items():
        for group in analysis.location_groups.values():
            points = sorted(
                (entry.date, round(hours_of_day(entry.instant, entry.timezone), 4))
                for entry in group.entries
            )
            series.append(ChartSeries(
                name=f"{zman_id} - {group.location}",
                zman_id=zman_id,
                location=group.location,
                points=tuple(points)
            ))
    return series


def value_range(series: List[ChartSeries]) -> Tuple[float, float]:
    """Axis bounds: half an hour of padding around all points, whole hours."""
    values = [value for line in series for _, value in line.points]
    if not values:
        return 0.0, 24.0
    return float(math.floor(min(values) - 0.5)), float(math.ceil(max(values) + 0.5))
