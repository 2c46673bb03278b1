"""Short-lived cache of Hebcal responses keyed by rounded coordinates and date range."""

from typing import Any, Callable, Dict, Optional, Tuple
from collections import OrderedDict
import copy
import time
import structlog

logger = structlog.get_logger()

CacheKey = Tuple[float, float, str, str]


class ZmanimCache:
    """Least-recently-used response cache whose entries expire after a fixed lifetime.

    Payloads are copied on the way in and out so callers can never alter a
    stored response.
    """

    def __init__(
        self,
        max_size: int = 256,
        ttl_seconds: int = 3600,
        clock: Callable[[], float] = time.monotonic
    ):
        """Initialize the cache."""
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        # key -> (expires_at, payload), oldest use first
        self._entries: "OrderedDict[CacheKey, Tuple[float, Dict[str, Any]]]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    @staticmethod
    def _key(latitude: float, longitude: float, start_date: str, end_date: str) -> CacheKey:
        # Four decimals is roughly 11 m, far below any change in zmanim
        return (round(latitude, 4), round(longitude, 4), start_date, end_date)

    async def get(
        self,
        latitude: float,
        longitude: float,
        start_date: str,
        end_date: str
    ) -> Optional[Dict[str, Any]]:
        """Return a cached response, or None if absent or expired."""
        key = self._key(latitude, longitude, start_date, end_date)
        stored = self._entries.get(key)
        if stored is None:
            return None

        expires_at, payload = stored
        if self._clock() >= expires_at:
            del self._entries[key]
            logger.debug("Cache entry expired", latitude=latitude, longitude=longitude)
            return None

        self._entries.move_to_end(key)
        return copy.deepcopy(payload)

    async def put(
        self,
        latitude: float,
        longitude: float,
        start_date: str,
        end_date: str,
        payload: Dict[str, Any]
    ) -> None:
        """Store a response, evicting the least recently used beyond max_size."""
        key = self._key(latitude, longitude, start_date, end_date)
        self._entries[key] = (self._clock() + self.ttl_seconds, copy.deepcopy(payload))
        self._entries.move_to_end(key)

        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)

        logger.debug(
            "Cached zmanim response",
            latitude=latitude,
            longitude=longitude,
            start_date=start_date,
            end_date=end_date,
            cache_size=len(self._entries)
        )
