"""Run the full comparison for a dataset."""

from typing import Optional, Sequence
import structlog

from ..models.location import LocationDataset
from ..models.analysis import AnalysisResult, ZmanAnalysis
from ..models.zman import get_zman_label
from .aggregator import aggregate
from .comparator import overall_extremes, pairwise_relations
from .timezone_utils import TimeFormatter, format_local_time

logger = structlog.get_logger()


class ZmanimAnalyzer:
    """Builds per-zman comparisons from a fully fetched dataset.
    
    Holds no state between calls; every call recomputes from its input.
    """
    
    def __init__(self, formatter: TimeFormatter = format_local_time):
        """Initialize the analyzer."""
        self.formatter = formatter
    
    def analyze_zman(self, dataset: LocationDataset, zman_id: str) -> ZmanAnalysis:
        """Aggregate and compare a single zman."""
        aggregation = aggregate(dataset, zman_id, self.formatter)
        
        return ZmanAnalysis(
            zman_id=zman_id,
            label=get_zman_label(zman_id),
            aggregation=aggregation,
            overall=overall_extremes(zman_id, aggregation.entries),
            relations=tuple(pairwise_relations(aggregation)),
        )
    
    def analyze(
        self,
        dataset: LocationDataset,
        zmanim: Optional[Sequence[str]] = None
    ) -> AnalysisResult:
        """Analyze the requested zmanim, or every zman present in the data."""
        zman_ids = list(zmanim) if zmanim is not None else dataset.zman_ids()
        
        result = AnalysisResult(
            locations=tuple(dataset.labels),
            zmanim={zman_id: self.analyze_zman(dataset, zman_id) for zman_id in zman_ids},
        )
        
        logger.info(
            "Zmanim analysis complete",
            locations=len(dataset),
            zmanim=zman_ids,
            entries=sum(len(analysis.aggregation.entries) for analysis in result.zmanim.values())
        )
        
        return result
