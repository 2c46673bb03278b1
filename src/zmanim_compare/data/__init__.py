"""Retrieval adapters for zmanim and geocoding."""

from .hebcal import HebcalClient, normalize_times
from .geocoding import NominatimGeocoder, GeocodedLocation, parse_coordinates
from .cache import ZmanimCache

__all__ = [
    "HebcalClient",
    "normalize_times",
    "NominatimGeocoder",
    "GeocodedLocation",
    "parse_coordinates",
    "ZmanimCache",
]
