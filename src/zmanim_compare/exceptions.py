"""Errors raised by the retrieval adapters."""

from typing import Optional


class ZmanimError(Exception):
    """Base class for zmanim lookup errors."""


class GeocodingError(ZmanimError):
    """A place name could not be resolved to coordinates."""

    def __init__(self, message: str, query: Optional[str] = None):
        super().__init__(message)
        self.query = query


class FetchError(ZmanimError):
    """The zmanim service did not return usable data."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
