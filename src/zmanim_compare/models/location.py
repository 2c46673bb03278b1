"""Per-location zmanim data as handed over by the retrieval layer."""

from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple
from pydantic import BaseModel, Field

# Kept exactly as received; numbers and other types must not be coerced to
# datetimes here, parse_instant decides what is usable
RawInstant = Any


class ZmanRecord(BaseModel):
    """A single raw time for one zman, location and date."""
    zman_id: str
    location_index: int
    location: str
    date: str = Field(description="ISO calendar date (yyyy-MM-dd) exactly as supplied")
    instant: RawInstant = None
    timezone: str

    class Config:
        """Pydantic config."""
        frozen = True


class LocationData(BaseModel):
    """Zmanim for one location over a date range."""
    label: str
    timezone: str = Field(description="IANA zone identifier for the location")
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    times: Dict[str, Dict[str, RawInstant]] = Field(default_factory=dict)

    class Config:
        """Pydantic config."""
        frozen = True

    @classmethod
    def from_hebcal(cls, payload: Dict[str, Any], label: Optional[str] = None) -> "LocationData":
        """Build from a Hebcal zmanim response with date-keyed times."""
        location = payload.get("location") or {}
        return cls(
            label=label or location.get("title") or location.get("name") or "Unknown",
            timezone=location.get("tzid", ""),
            latitude=location.get("latitude"),
            longitude=location.get("longitude"),
            times={
                zman_id: dict(by_date)
                for zman_id, by_date in (payload.get("times") or {}).items()
                if isinstance(by_date, dict)
            },
        )


class LocationDataset(BaseModel):
    """Ordered collection of locations; position is the location index."""
    locations: Tuple[LocationData, ...] = ()

    class Config:
        """Pydantic config."""
        frozen = True

    @classmethod
    def of(cls, locations: Sequence[LocationData]) -> "LocationDataset":
        """Create a dataset from any sequence of locations."""
        return cls(locations=tuple(locations))

    @property
    def labels(self) -> List[str]:
        """Location labels in index order."""
        return [location.label for location in self.locations]

    def __len__(self) -> int:
        return len(self.locations)

    def records(self, zman_id: str) -> Iterator[ZmanRecord]:
        """Yield every raw record for a zman, in location then date order."""
        for index, location in enumerate(self.locations):
            for date, instant in location.times.get(zman_id, {}).items():
                yield ZmanRecord(
                    zman_id=zman_id,
                    location_index=index,
                    location=location.label,
                    date=date,
                    instant=instant,
                    timezone=location.timezone,
                )

    def zman_ids(self) -> List[str]:
        """All zman ids present in any location, first-seen order."""
        seen: Dict[str, None] = {}
        for location in self.locations:
            for zman_id in location.times:
                seen.setdefault(zman_id, None)
        return list(seen)

    def dates(self, zman_ids: Optional[Sequence[str]] = None) -> List[str]:
        """Sorted union of dates across locations for the given zmanim."""
        found = set()
        for location in self.locations:
            for zman_id in zman_ids if zman_ids is not None else location.times:
                found.update(location.times.get(zman_id, {}))
        return sorted(found)
