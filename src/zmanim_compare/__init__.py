"""
Zmanim comparison across locations and dates

Groups daily halachic times by date and by location, ranks locations,
and finds which locations are consistently earlier or later.
"""

from .core import ZmanimAnalyzer
from .models import AnalysisResult, LocationData, LocationDataset, Relation, ServiceConfig
from .service import ZmanimService

__version__ = "0.1.0"
__all__ = [
    "ZmanimAnalyzer",
    "ZmanimService",
    "AnalysisResult",
    "LocationData",
    "LocationDataset",
    "Relation",
    "ServiceConfig",
]
