"""Data models and types for the zmanim comparison service."""

from .zman import ZmanCategory, ZmanOption, ZMANIM_OPTIONS, get_zman_label
from .location import ZmanRecord, LocationData, LocationDataset
from .analysis import (
    ComparisonEntry,
    DateGroup,
    LocationGroup,
    Relation,
    PairwiseComparison,
    OverallExtremes,
    Aggregation,
    ZmanAnalysis,
    AnalysisResult,
)
from .config import ServiceConfig, HebcalConfig, GeocodingConfig, CacheConfig

__all__ = [
    "ZmanCategory",
    "ZmanOption",
    "ZMANIM_OPTIONS",
    "get_zman_label",
    "ZmanRecord",
    "LocationData",
    "LocationDataset",
    "ComparisonEntry",
    "DateGroup",
    "LocationGroup",
    "Relation",
    "PairwiseComparison",
    "OverallExtremes",
    "Aggregation",
    "ZmanAnalysis",
    "AnalysisResult",
    "ServiceConfig",
    "HebcalConfig",
    "GeocodingConfig",
    "CacheConfig",
]
