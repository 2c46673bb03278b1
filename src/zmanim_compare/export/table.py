"""Flat date/location table and its tab-separated export."""

from typing import Dict, List, Optional, Sequence
from pydantic import BaseModel

from ..models.analysis import AnalysisResult
from ..models.zman import get_zman_label

MISSING_VALUE = "-"


class TableRow(BaseModel):
    """One date and location with a local time per zman."""
    date: str
    location: str
    times: Dict[str, Optional[str]]


def build_rows(result: AnalysisResult, zmanim: Optional[Sequence[str]] = None) -> List[TableRow]:
    """Rows for every date (ascending) and every location (input order)."""
    zman_ids = list(zmanim) if zmanim is not None else list(result.zmanim)
    
    local_times: Dict[tuple, str] = {}
    dates = set()
    for zman_id in zman_ids:
        analysis = result.zmanim.get(zman_id)
        if analysis is None:
            continue
        # Dates whose values were all unusable still get rows
        dates.update(analysis.aggregation.dates)
        for date, group in analysis.date_groups.items():
            dates.add(date)
            for entry in group.entries:
                local_times[(zman_id, date, entry.location_index)] = entry.local_time
    
    rows = []
    for date in sorted(dates):
        for index, location in enumerate(result.locations):
            rows.append(TableRow(
                date=date,
                location=location,
                times={
                    zman_id: local_times.get((zman_id, date, index))
                    for zman_id in zman_ids
                }
            ))
    return rows


def to_tsv(result: AnalysisResult, zmanim: Optional[Sequence[str]] = None) -> str:
    """Serialize as tab-separated text: date, location, one column per zman."""
    zman_ids = list(zmanim) if zmanim is not None else list(result.zmanim)
    
    lines = ["\t".join(["Date", "Location"] + [get_zman_label(zman_id) for zman_id in zman_ids])]
    for row in build_rows(result, zman_ids):
        cells = [row.date, row.location]
        cells.extend(row.times.get(zman_id) or MISSING_VALUE for zman_id in zman_ids)
        lines.append("\t".join(cells))
    
    return "\n".join(lines) + "\n"
