"""Nominatim geocoding client."""

import math
from typing import Optional, Tuple
import structlog
import httpx
from pydantic import BaseModel

from ..models.config import GeocodingConfig
from ..exceptions import GeocodingError

logger = structlog.get_logger()


class GeocodedLocation(BaseModel):
    """Coordinates resolved for a location query."""
    latitude: float
    longitude: float
    display_name: str


def parse_coordinates(query: str) -> Optional[Tuple[float, float]]:
    """Parse a "lat, lng" string, or return None if it is not one."""
    parts = [part.strip() for part in query.split(",")]
    if len(parts) != 2:
        return None
    try:
        latitude, longitude = float(parts[0]), float(parts[1])
    except ValueError:
        return None
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return None
    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        return None
    return latitude, longitude


class NominatimGeocoder:
    """Client for resolving place names through Nominatim."""
    
    def __init__(self, config: GeocodingConfig, client: Optional[httpx.AsyncClient] = None):
        """Initialize the geocoder."""
        self.config = config
        self.client = client or httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            headers={"User-Agent": config.user_agent, "Accept": "application/json"}
        )
        
    async def __aenter__(self):
        """Async context manager entry."""
        return self
        
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
    
    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()
    
    def _prepare_query(self, query: str) -> str:
        """Append the default country when the query names none."""
        suffix = self.config.default_country_suffix
        lowered = query.lower()
        if suffix and not any(name in lowered for name in ("canada", "usa", "united states")):
            return f"{query}, {suffix}"
        return query
    
    async def geocode(self, query: str) -> GeocodedLocation:
        """Resolve a place name or "lat, lng" string to coordinates.
        
        Args:
            query: Free-form place name or coordinate pair
            
        Returns:
            GeocodedLocation with coordinates and a short display name
            
        Raises:
            GeocodingError: If the lookup fails or finds nothing
        """
        coordinates = parse_coordinates(query)
        if coordinates:
            latitude, longitude = coordinates
            return GeocodedLocation(
                latitude=latitude,
                longitude=longitude,
                display_name=f"{latitude:.6f}, {longitude:.6f}"
            )
        
        prepared = self._prepare_query(query)
        params = {
            "format": "json",
            "q": prepared,
            "limit": "1",
            "addressdetails": "1",
        }
        if self.config.country_codes:
            params["countrycodes"] = ",".join(self.config.country_codes)
        
        try:
            response = await self.client.get("/search", params=params)
            response.raise_for_status()
            results = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "HTTP error geocoding location",
                status_code=e.response.status_code,
                response_text=e.response.text,
                query=prepared
            )
            raise GeocodingError(f"Geocoding failed: {e.response.status_code}", query=query) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error geocoding location", error=str(e), query=prepared)
            raise GeocodingError(f"Geocoding failed: {e}", query=query) from e
        
        if not isinstance(results, list) or not results:
            raise GeocodingError(f"Location not found: {prepared}", query=query)
        
        result = results[0]
        try:
            latitude = float(result["lat"])
            longitude = float(result["lon"])
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodingError(f"Invalid geocoding response for: {prepared}", query=query) from e
        
        address = result.get("address") or {}
        display_name = (
            address.get("city")
            or address.get("town")
            or address.get("village")
            or prepared.split(",")[0].strip()
        )
        
        logger.debug(
            "Geocoded location",
            query=query,
            latitude=latitude,
            longitude=longitude,
            display_name=display_name
        )
        
        return GeocodedLocation(latitude=latitude, longitude=longitude, display_name=display_name)
    
    async def reverse(self, latitude: float, longitude: float) -> str:
        """Resolve coordinates to Nominatim's display name.
        
        Raises:
            GeocodingError: If the lookup fails
        """
        params = {
            "format": "json",
            "lat": str(latitude),
            "lon": str(longitude),
            "zoom": "10",
        }
        
        try:
            response = await self.client.get("/reverse", params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "HTTP error reverse geocoding",
                status_code=e.response.status_code,
                response_text=e.response.text,
                latitude=latitude,
                longitude=longitude
            )
            raise GeocodingError(f"Reverse geocoding failed: {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error reverse geocoding", error=str(e), latitude=latitude, longitude=longitude)
            raise GeocodingError(f"Reverse geocoding failed: {e}") from e
        
        display_name = data.get("display_name") if isinstance(data, dict) else None
        if not display_name:
            raise GeocodingError(f"No place found at {latitude}, {longitude}")
        return display_name
