"""Hebcal zmanim API client."""

from typing import Any, Dict, Optional
import structlog
import httpx

from ..models.config import HebcalConfig
from ..exceptions import FetchError

logger = structlog.get_logger()


def normalize_times(payload: Dict[str, Any], start_date: str, end_date: str) -> Dict[str, Any]:
    """Return the payload with every zman keyed by date.
    
    Single-day lookups come back as ``{zman: time}``; those are rewrapped
    as ``{zman: {date: time}}`` so both shapes look the same downstream.
    """
    times = payload.get("times")
    if start_date != end_date or not isinstance(times, dict):
        return payload
    
    normalized = dict(payload)
    normalized["times"] = {
        zman_id: value if isinstance(value, dict) else {start_date: value}
        for zman_id, value in times.items()
    }
    return normalized


class HebcalClient:
    """Client for the Hebcal zmanim endpoint."""
    
    def __init__(self, config: HebcalConfig, client: Optional[httpx.AsyncClient] = None):
        """Initialize the Hebcal client."""
        self.config = config
        self.client = client or httpx.AsyncClient(
            timeout=config.timeout_seconds,
            headers={"Accept": "application/json"}
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
    
    async def fetch_zmanim(
        self,
        latitude: float,
        longitude: float,
        start_date: str,
        end_date: str
    ) -> Dict[str, Any]:
        """Fetch zmanim for a coordinate over an inclusive date range.
        
        Args:
            latitude: Location latitude
            longitude: Location longitude
            start_date: First date, ISO format
            end_date: Last date, ISO format
            
        Returns:
            Hebcal response with ``times`` keyed by zman then date
            
        Raises:
            FetchError: If the request fails or the response is not JSON
        """
        params = {
            **self.config.query_params(),
            "latitude": str(latitude),
            "longitude": str(longitude),
            "start": start_date,
            "end": end_date,
        }
        
        logger.debug(
            "Fetching zmanim",
            latitude=latitude,
            longitude=longitude,
            start_date=start_date,
            end_date=end_date
        )
        
        try:
            response = await self.client.get(self.config.base_url, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Hebcal API error",
                status_code=e.response.status_code,
                response_text=e.response.text,
                url=str(e.request.url)
            )
            raise FetchError(
                f"Failed to fetch zmanim data: {e.response.status_code} {e.response.reason_phrase}",
                status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            logger.error("Error fetching zmanim", error=str(e))
            raise FetchError(f"Failed to fetch zmanim data: {e}") from e
        except ValueError as e:
            raise FetchError("Hebcal returned a non-JSON response") from e
        
        if not isinstance(payload, dict):
            raise FetchError("Hebcal returned an unexpected response")
        
        return normalize_times(payload, start_date, end_date)
