"""Timezone utilities for zmanim comparison.

Zmanim arrive as absolute timestamps, each location carrying its own IANA
zone. Comparisons always use the absolute instant; the zone is only used
to render wall-clock time as observed at that location.
"""

from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import structlog

logger = structlog.get_logger()

UTC_TZ = ZoneInfo("UTC")

# (instant, IANA zone id) -> display string
TimeFormatter = Callable[[datetime, str], str]


@lru_cache(maxsize=256)
def get_zone(tzid: str) -> Optional[ZoneInfo]:
    """Resolve an IANA zone identifier.
    
    Args:
        tzid: Zone identifier such as "America/New_York"
        
    Returns:
        The zone, or None when the identifier is not recognized
    """
    if not tzid:
        return None
    try:
        return ZoneInfo(tzid)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        # OSError covers zone directories such as "America" and overlong ids
        return None


def ensure_utc(dt: datetime) -> datetime:
    """Ensure a datetime is in UTC timezone.
    
    Args:
        dt: Datetime that may be naive or in any timezone
        
    Returns:
        Datetime converted to UTC timezone
    """
    if dt.tzinfo is None:
        # Assume naive datetimes are UTC
        return dt.replace(tzinfo=UTC_TZ)
    else:
        return dt.astimezone(UTC_TZ)


def ensure_zone(dt: datetime, tzid: str) -> datetime:
    """Ensure a datetime is expressed in the given zone.
    
    Args:
        dt: Datetime that may be naive or in any timezone
        tzid: Target IANA zone identifier
        
    Returns:
        Datetime converted to the zone; naive input is taken as wall-clock
        time in that zone
        
    Raises:
        ZoneInfoNotFoundError: If the zone identifier is not recognized
    """
    zone = get_zone(tzid)
    if zone is None:
        raise ZoneInfoNotFoundError(f"Unknown timezone: {tzid!r}")
    if dt.tzinfo is None:
        return dt.replace(tzinfo=zone)
    return dt.astimezone(zone)


def parse_instant(raw: Any, tzid: Optional[str] = None) -> Optional[datetime]:
    """Parse a raw timestamp into an aware datetime.
    
    Args:
        raw: ISO-8601 date-time string, datetime, or None
        tzid: Zone used to interpret naive values; UTC when omitted

    Returns:
        Timezone-aware datetime, or None for missing or malformed input,
        including bare dates and values of any other type
    """
    if raw is None:
        return None
    
    if isinstance(raw, datetime):
        parsed = raw
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        if not any(separator in text for separator in ("T", "t", " ")):
            # A bare date is not a time of day
            logger.debug("Timestamp without a time part", raw=raw)
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            logger.debug("Unparseable timestamp", raw=raw)
            return None
    else:
        logger.debug("Unsupported timestamp type", raw_type=type(raw).__name__)
        return None
    
    if parsed.tzinfo is not None:
        return parsed
    
    if tzid:
        zone = get_zone(tzid)
        if zone is None:
            logger.debug("Naive timestamp with unknown timezone", raw=str(raw), timezone=tzid)
            return None
        return parsed.replace(tzinfo=zone)
    return parsed.replace(tzinfo=timezone.utc)


def format_local_time(instant: datetime, tzid: str) -> str:
    """Render an instant as 12-hour wall-clock time in a zone.
    
    The zone's offset for that specific date is applied, so results are
    correct on either side of a daylight-saving transition.
    
    Args:
        instant: Absolute point in time
        tzid: IANA zone identifier of the location
        
    Returns:
        Time such as "5:32 AM" or "12:05 PM"
    """
    local = ensure_zone(ensure_utc(instant), tzid)
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {suffix}"


def hours_of_day(instant: datetime, tzid: str) -> float:
    """Local time of day in a zone as fractional hours (e.g. 5.5 for 5:30)."""
    local = ensure_zone(ensure_utc(instant), tzid)
    return local.hour + local.minute / 60 + local.second / 3600


def log_timezone_conversion(operation: str, **kwargs) -> None:
    """Log timezone conversion operations for debugging.
    
    Args:
        operation: Description of the operation being performed
        **kwargs: Additional logging data
    """
    logger.debug(f"Timezone conversion: {operation}", **kwargs)
