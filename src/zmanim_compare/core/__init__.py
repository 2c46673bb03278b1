"""Core comparison components."""

from .analyzer import ZmanimAnalyzer
from .aggregator import aggregate, group_by_date, group_by_location
from .comparator import (
    compare_locations,
    format_duration,
    overall_extremes,
    pairwise_relations,
    time_difference,
)
from .normalizer import normalize_record, normalize_records
from .timezone_utils import (
    TimeFormatter,
    ensure_utc,
    ensure_zone,
    format_local_time,
    get_zone,
    hours_of_day,
    parse_instant,
    UTC_TZ
)

__all__ = [
    "ZmanimAnalyzer",
    "aggregate",
    "group_by_date",
    "group_by_location",
    "compare_locations",
    "format_duration",
    "overall_extremes",
    "pairwise_relations",
    "time_difference",
    "normalize_record",
    "normalize_records",
    "TimeFormatter",
    "ensure_utc",
    "ensure_zone",
    "format_local_time",
    "get_zone",
    "hours_of_day",
    "parse_instant",
    "UTC_TZ"
]
