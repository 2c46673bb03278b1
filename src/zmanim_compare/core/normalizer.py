"""Turn raw per-location records into comparable entries.

This is the single place where absent or unusable values are dropped, so
that grouping and comparison can assume every entry has a real instant.
"""

from typing import Dict, List, Optional
from zoneinfo import ZoneInfoNotFoundError
import structlog

from ..models.location import LocationDataset, ZmanRecord
from ..models.analysis import ComparisonEntry
from .timezone_utils import TimeFormatter, format_local_time, parse_instant, log_timezone_conversion

logger = structlog.get_logger()


def normalize_record(
    record: ZmanRecord,
    formatter: TimeFormatter = format_local_time
) -> Optional[ComparisonEntry]:
    """Normalize one record, or return None if it has no usable instant.
    
    Raises:
        ZoneInfoNotFoundError: If the default formatter cannot resolve the
            record's timezone
    """
    instant = parse_instant(record.instant, record.timezone)
    if instant is None:
        return None
    
    return ComparisonEntry(
        zman_id=record.zman_id,
        location=record.location,
        location_index=record.location_index,
        date=record.date,
        instant=instant,
        local_time=formatter(instant, record.timezone),
        timezone=record.timezone,
    )


def normalize_records(
    dataset: LocationDataset,
    zman_id: str,
    formatter: TimeFormatter = format_local_time
) -> List[ComparisonEntry]:
    """Normalize every record for a zman, dropping missing and malformed values.
    
    Locations whose timezone cannot be resolved contribute nothing; no
    substitute zone is assumed.
    
    Args:
        dataset: Locations with raw times
        zman_id: Zman to extract
        formatter: Renders an instant as local time for a zone
        
    Returns:
        Entries in location order, then input date order
    """
    entries: List[ComparisonEntry] = []
    missing = 0
    malformed = 0
    unknown_zones: Dict[int, str] = {}
    
    for record in dataset.records(zman_id):
        if record.location_index in unknown_zones:
            continue
        if record.instant is None:
            missing += 1
            continue
        
        try:
            entry = normalize_record(record, formatter)
        except ZoneInfoNotFoundError:
            unknown_zones[record.location_index] = record.timezone
            continue
        
        if entry is None:
            malformed += 1
            continue
        entries.append(entry)
    
    for location_index, tzid in unknown_zones.items():
        logger.warning(
            "Skipping location with unrecognized timezone",
            zman_id=zman_id,
            location=dataset.locations[location_index].label,
            timezone=tzid
        )
    
    if missing or malformed:
        log_timezone_conversion(
            "dropped records without a usable instant",
            zman_id=zman_id,
            missing=missing,
            malformed=malformed
        )
    
    logger.debug(
        "Normalized zman records",
        zman_id=zman_id,
        entries=len(entries)
    )
    
    return entries
