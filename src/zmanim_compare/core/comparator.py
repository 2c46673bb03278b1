"""Earliest/latest summaries and pairwise location ordering."""

from typing import Dict, Iterable, List, Optional, Union
from datetime import datetime
import structlog

from ..models.analysis import (
    Aggregation,
    ComparisonEntry,
    DateGroup,
    LocationGroup,
    OverallExtremes,
    PairwiseComparison,
    Relation,
)

logger = structlog.get_logger()


def _pluralize(value: int, unit: str) -> str:
    return f"{value} {unit}" if value == 1 else f"{value} {unit}s"


def format_duration(minutes: int) -> str:
    """Render a minute count as "H hour(s) M minute(s)".
    
    The hour term is left out when it is zero.
    """
    hours, remainder = divmod(abs(int(minutes)), 60)
    parts = []
    if hours:
        parts.append(_pluralize(hours, "hour"))
    parts.append(_pluralize(remainder, "minute"))
    return " ".join(parts)


def time_difference(group: Union[DateGroup, LocationGroup]) -> Optional[str]:
    """Spread between a group's earliest and latest entries, if it has two or more."""
    minutes = group.difference_minutes
    if minutes is None:
        return None
    return format_duration(minutes)


def overall_extremes(zman_id: str, entries: Iterable[ComparisonEntry]) -> Optional[OverallExtremes]:
    """Globally earliest and latest entries across all dates and locations."""
    ordered = sorted(entries, key=lambda entry: (entry.instant, entry.location_index, entry.date))
    if not ordered:
        return None
    return OverallExtremes(zman_id=zman_id, earliest=ordered[0], latest=ordered[-1])


def _instants_by_date(group: Optional[LocationGroup]) -> Dict[str, datetime]:
    if group is None:
        return {}
    return {entry.date: entry.instant for entry in group.entries}


def compare_locations(aggregation: Aggregation, first_index: int, second_index: int) -> PairwiseComparison:
    """Decide whether one location is always earlier or later than another.
    
    Only dates on which both locations have a value count. The verdict is
    directional only if it holds strictly on every one of those dates; a
    tie or a single contrary date makes it ``Relation.NONE``, as does an
    empty set of shared dates.
    """
    first = _instants_by_date(aggregation.location_groups.get(first_index))
    second = _instants_by_date(aggregation.location_groups.get(second_index))
    shared_dates = sorted(date for date in first if date in second)
    
    always_earlier = always_later = bool(shared_dates)
    for date in shared_dates:
        if not first[date] < second[date]:
            always_earlier = False
        if not first[date] > second[date]:
            always_later = False
        if not (always_earlier or always_later):
            break
    
    if always_earlier:
        relation = Relation.ALWAYS_EARLIER
    elif always_later:
        relation = Relation.ALWAYS_LATER
    else:
        relation = Relation.NONE
    
    return PairwiseComparison(
        zman_id=aggregation.zman_id,
        first_index=first_index,
        first=aggregation.locations[first_index],
        second_index=second_index,
        second=aggregation.locations[second_index],
        relation=relation,
        shared_dates=tuple(shared_dates),
    )


def pairwise_relations(aggregation: Aggregation) -> List[PairwiseComparison]:
    """Compare every unordered pair of locations once (lower index first)."""
    comparisons = []
    count = len(aggregation.locations)
    for first_index in range(count):
        for second_index in range(first_index + 1, count):
            comparisons.append(compare_locations(aggregation, first_index, second_index))
    
    logger.debug(
        "Computed pairwise relations",
        zman_id=aggregation.zman_id,
        pairs=len(comparisons),
        directional=sum(1 for comparison in comparisons if comparison.is_directional)
    )
    
    return comparisons
