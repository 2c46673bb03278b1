"""Derived analysis models.

Everything here is produced fresh by the aggregation and comparison steps
and is frozen once built.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, Field


class ComparisonEntry(BaseModel):
    """A normalized, comparable time for one zman, location and date."""
    zman_id: str
    location: str
    location_index: int
    date: str
    instant: datetime
    local_time: str
    timezone: str

    class Config:
        """Pydantic config."""
        frozen = True


class _EntryGroup(BaseModel):
    """Entries kept in ascending instant order."""
    zman_id: str
    entries: Tuple[ComparisonEntry, ...] = ()

    class Config:
        """Pydantic config."""
        frozen = True

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def earliest(self) -> Optional[ComparisonEntry]:
        """First entry after sorting, if any."""
        return self.entries[0] if self.entries else None

    @property
    def latest(self) -> Optional[ComparisonEntry]:
        """Last entry after sorting, if any."""
        return self.entries[-1] if self.entries else None

    @property
    def difference(self) -> Optional[timedelta]:
        """Gap between earliest and latest; None when there is nothing to compare."""
        if len(self.entries) < 2:
            return None
        return self.entries[-1].instant - self.entries[0].instant

    @property
    def difference_minutes(self) -> Optional[int]:
        """Gap between earliest and latest in whole minutes."""
        difference = self.difference
        if difference is None:
            return None
        return int(abs(difference.total_seconds()) // 60)


class DateGroup(_EntryGroup):
    """All locations' times for one zman on one date."""
    date: str


class LocationGroup(_EntryGroup):
    """All dates' times for one zman at one location."""
    location: str
    location_index: int


class Relation(str, Enum):
    """Ordering verdict between two locations across their shared dates."""
    ALWAYS_EARLIER = "always_earlier"
    ALWAYS_LATER = "always_later"
    NONE = "none"

    def inverse(self) -> "Relation":
        """Verdict seen from the other location."""
        if self is Relation.ALWAYS_EARLIER:
            return Relation.ALWAYS_LATER
        if self is Relation.ALWAYS_LATER:
            return Relation.ALWAYS_EARLIER
        return Relation.NONE


class PairwiseComparison(BaseModel):
    """Relation of ``first`` to ``second`` for one zman."""
    zman_id: str
    first_index: int
    first: str
    second_index: int
    second: str
    relation: Relation
    shared_dates: Tuple[str, ...] = ()

    class Config:
        """Pydantic config."""
        frozen = True

    @property
    def is_directional(self) -> bool:
        return self.relation is not Relation.NONE

    def inverse(self) -> "PairwiseComparison":
        """The same comparison stated from ``second``'s point of view."""
        return PairwiseComparison(
            zman_id=self.zman_id,
            first_index=self.second_index,
            first=self.second,
            second_index=self.first_index,
            second=self.first,
            relation=self.relation.inverse(),
            shared_dates=self.shared_dates,
        )


class OverallExtremes(BaseModel):
    """Globally earliest and latest entries for a zman, ignoring dates."""
    zman_id: str
    earliest: ComparisonEntry
    latest: ComparisonEntry

    class Config:
        """Pydantic config."""
        frozen = True


class Aggregation(BaseModel):
    """Entries for one zman grouped by date and by location."""
    zman_id: str
    locations: Tuple[str, ...] = ()
    dates: Tuple[str, ...] = Field(default=(), description="Every date supplied for the zman, usable or not")
    entries: Tuple[ComparisonEntry, ...] = ()
    date_groups: Dict[str, DateGroup] = {}
    location_groups: Dict[int, LocationGroup] = {}

    class Config:
        """Pydantic config."""
        frozen = True


class ZmanAnalysis(BaseModel):
    """Complete comparison output for one zman."""
    zman_id: str
    label: str
    aggregation: Aggregation
    overall: Optional[OverallExtremes] = None
    relations: Tuple[PairwiseComparison, ...] = ()

    class Config:
        """Pydantic config."""
        frozen = True

    @property
    def date_groups(self) -> Dict[str, DateGroup]:
        return self.aggregation.date_groups

    @property
    def location_groups(self) -> Dict[int, LocationGroup]:
        return self.aggregation.location_groups

    def relation(self, first_index: int, second_index: int) -> PairwiseComparison:
        """Look up the comparison of two locations in either order."""
        for comparison in self.relations:
            if comparison.first_index == first_index and comparison.second_index == second_index:
                return comparison
            if comparison.first_index == second_index and comparison.second_index == first_index:
                return comparison.inverse()
        raise KeyError(f"No comparison between locations {first_index} and {second_index}")

    def directional_relations(self) -> List[PairwiseComparison]:
        """Comparisons that make an always-earlier or always-later claim."""
        return [comparison for comparison in self.relations if comparison.is_directional]


class AnalysisResult(BaseModel):
    """Analysis for every requested zman over one dataset."""
    locations: Tuple[str, ...] = ()
    zmanim: Dict[str, ZmanAnalysis] = {}

    class Config:
        """Pydantic config."""
        frozen = True

    def __getitem__(self, zman_id: str) -> ZmanAnalysis:
        return self.zmanim[zman_id]
