"""Group comparison entries by date and by location."""

from typing import Dict, Iterable, List, Tuple
import structlog

from ..models.location import LocationDataset
from ..models.analysis import Aggregation, ComparisonEntry, DateGroup, LocationGroup
from .normalizer import normalize_records
from .timezone_utils import TimeFormatter, format_local_time

logger = structlog.get_logger()


def _date_group_order(entry: ComparisonEntry) -> Tuple:
    # Equal instants keep input location order
    return (entry.instant, entry.location_index)


def _location_group_order(entry: ComparisonEntry) -> Tuple:
    return (entry.instant, entry.date)


def group_by_date(entries: Iterable[ComparisonEntry]) -> Dict[Tuple[str, str], DateGroup]:
    """Bucket entries under (zman, date), each bucket ascending by instant.
    
    Dates are the exact strings supplied with the input; they are never
    re-parsed before grouping.
    """
    buckets: Dict[Tuple[str, str], List[ComparisonEntry]] = {}
    for entry in entries:
        buckets.setdefault((entry.zman_id, entry.date), []).append(entry)
    
    return {
        key: DateGroup(
            zman_id=key[0],
            date=key[1],
            entries=tuple(sorted(bucket, key=_date_group_order))
        )
        for key, bucket in sorted(buckets.items(), key=lambda item: item[0])
    }


def group_by_location(entries: Iterable[ComparisonEntry]) -> Dict[Tuple[str, int], LocationGroup]:
    """Bucket entries under (zman, location index), each bucket ascending by instant."""
    buckets: Dict[Tuple[str, int], List[ComparisonEntry]] = {}
    for entry in entries:
        buckets.setdefault((entry.zman_id, entry.location_index), []).append(entry)
    
    return {
        key: LocationGroup(
            zman_id=key[0],
            location=bucket[0].location,
            location_index=key[1],
            entries=tuple(sorted(bucket, key=_location_group_order))
        )
        for key, bucket in sorted(buckets.items(), key=lambda item: item[0])
    }


def aggregate(
    dataset: LocationDataset,
    zman_id: str,
    formatter: TimeFormatter = format_local_time
) -> Aggregation:
    """Normalize and group one zman across every location and date.
    
    Args:
        dataset: Locations with raw times
        zman_id: Zman to aggregate
        formatter: Renders an instant as local time for a zone
        
    Returns:
        Aggregation with date groups keyed by ISO date (ascending) and
        location groups keyed by location index
    """
    entries = normalize_records(dataset, zman_id, formatter)
    
    date_groups = {date: group for (_, date), group in group_by_date(entries).items()}
    location_groups = {
        index: group for (_, index), group in group_by_location(entries).items()
    }
    
    logger.debug(
        "Aggregated zman",
        zman_id=zman_id,
        entries=len(entries),
        dates=len(date_groups),
        locations=len(location_groups)
    )
    
    return Aggregation(
        zman_id=zman_id,
        locations=tuple(dataset.labels),
        dates=tuple(dataset.dates([zman_id])),
        entries=tuple(entries),
        date_groups=date_groups,
        location_groups=location_groups,
    )
