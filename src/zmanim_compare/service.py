"""Lookup service: resolve locations, fetch zmanim, then analyze."""

from typing import List, Optional, Sequence
import asyncio
import time
import structlog
from pydantic import BaseModel, ValidationError

from .models.config import ServiceConfig
from .models.location import LocationData, LocationDataset
from .models.analysis import AnalysisResult
from .data import HebcalClient, NominatimGeocoder, ZmanimCache
from .core.analyzer import ZmanimAnalyzer
from .core.timezone_utils import TimeFormatter, format_local_time
from .exceptions import ZmanimError

logger = structlog.get_logger()


class LocationFetchResult(BaseModel):
    """Outcome of fetching one location's zmanim."""
    query: str
    index: int
    success: bool
    location: Optional[LocationData] = None
    error_message: Optional[str] = None
    from_cache: bool = False


class ComparisonReport(BaseModel):
    """Fetch outcomes plus the analysis of everything that succeeded."""
    start_date: str
    end_date: str
    fetches: List[LocationFetchResult]
    analysis: AnalysisResult
    processing_time_seconds: float = 0.0

    @property
    def failures(self) -> List[LocationFetchResult]:
        return [fetch for fetch in self.fetches if not fetch.success]


class ZmanimService:
    """Fetches zmanim for several locations and compares them."""
    
    def __init__(
        self,
        config: ServiceConfig,
        hebcal: Optional[HebcalClient] = None,
        geocoder: Optional[NominatimGeocoder] = None,
        cache: Optional[ZmanimCache] = None,
        formatter: TimeFormatter = format_local_time
    ):
        """Initialize the service."""
        self.config = config
        self.hebcal = hebcal or HebcalClient(config.hebcal)
        self.geocoder = geocoder or NominatimGeocoder(config.geocoding)
        if cache is None and config.cache.enabled:
            cache = ZmanimCache(
                max_size=config.cache.max_size,
                ttl_seconds=config.cache.ttl_seconds
            )
        self.cache = cache
        self.analyzer = ZmanimAnalyzer(formatter)
        
    async def __aenter__(self):
        """Async context manager entry."""
        return self
        
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
    
    async def close(self) -> None:
        """Close HTTP clients."""
        await self.hebcal.aclose()
        await self.geocoder.aclose()
    
    async def fetch_location(
        self,
        query: str,
        index: int,
        start_date: str,
        end_date: str
    ) -> LocationFetchResult:
        """Resolve and fetch a single location, capturing any failure."""
        try:
            resolved = await self.geocoder.geocode(query)
            
            payload = None
            if self.cache is not None:
                payload = await self.cache.get(
                    resolved.latitude, resolved.longitude, start_date, end_date
                )
            from_cache = payload is not None
            
            if payload is None:
                payload = await self.hebcal.fetch_zmanim(
                    resolved.latitude, resolved.longitude, start_date, end_date
                )
                if self.cache is not None:
                    await self.cache.put(
                        resolved.latitude, resolved.longitude, start_date, end_date, payload
                    )
            
            location = LocationData.from_hebcal(payload, label=query)
            
        except ZmanimError as e:
            logger.warning("Location fetch failed", query=query, error=str(e))
            return LocationFetchResult(
                query=query,
                index=index,
                success=False,
                error_message=str(e)
            )
        except ValidationError as e:
            logger.warning("Unexpected zmanim response", query=query, errors=e.error_count())
            return LocationFetchResult(
                query=query,
                index=index,
                success=False,
                error_message=f"Unexpected zmanim response: {e.error_count()} invalid field(s)"
            )
        
        logger.debug(
            "Location fetched",
            query=query,
            timezone=location.timezone,
            zmanim=len(location.times),
            from_cache=from_cache
        )
        
        return LocationFetchResult(
            query=query,
            index=index,
            success=True,
            location=location,
            from_cache=from_cache
        )
    
    async def fetch_all(
        self,
        queries: Sequence[str],
        start_date: str,
        end_date: str
    ) -> List[LocationFetchResult]:
        """Fetch every location concurrently; results keep input order.
        
        Returns only once every fetch has either succeeded or failed.
        """
        semaphore = asyncio.Semaphore(max(1, self.config.max_concurrent))
        
        async def fetch_with_semaphore(index: int, query: str) -> LocationFetchResult:
            async with semaphore:
                return await self.fetch_location(query, index, start_date, end_date)
        
        tasks = [fetch_with_semaphore(index, query) for index, query in enumerate(queries)]
        return list(await asyncio.gather(*tasks))
    
    async def compare(
        self,
        queries: Sequence[str],
        start_date: str,
        end_date: str,
        zmanim: Optional[Sequence[str]] = None
    ) -> ComparisonReport:
        """Fetch all locations and analyze the ones that succeeded.
        
        Args:
            queries: Place names or "lat, lng" strings, in display order
            start_date: First date, ISO format
            end_date: Last date, ISO format
            zmanim: Zman ids to analyze; every returned zman when omitted
            
        Returns:
            ComparisonReport with per-location fetch outcomes and analysis
        """
        started = time.monotonic()
        fetches = await self.fetch_all(queries, start_date, end_date)
        
        dataset = LocationDataset.of(
            [fetch.location for fetch in fetches if fetch.success and fetch.location]
        )
        analysis = self.analyzer.analyze(dataset, zmanim)
        
        elapsed = time.monotonic() - started
        logger.info(
            "Comparison complete",
            requested=len(queries),
            fetched=len(dataset),
            failed=len(fetches) - len(dataset),
            processing_time_seconds=round(elapsed, 3)
        )
        
        return ComparisonReport(
            start_date=start_date,
            end_date=end_date,
            fetches=fetches,
            analysis=analysis,
            processing_time_seconds=elapsed
        )
