"""Configuration models for the zmanim comparison service."""

import os
from pathlib import Path
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


def _load_env_file():
    """Load environment variables from .env file in common locations."""
    env_paths = [
        Path.cwd() / ".env",  # Current directory
        Path(__file__).parent.parent.parent.parent / "config" / ".env",  # <repo>/config/.env
        Path(__file__).parent.parent / ".env",  # Package directory
    ]
    
    for env_path in env_paths:
        if env_path.exists():
            from dotenv import load_dotenv
            load_dotenv(env_path)
            break


class HebcalConfig(BaseModel):
    """Hebcal zmanim API configuration."""
    base_url: str = Field(default="https://www.hebcal.com/zmanim/v2")
    timeout_seconds: float = Field(default=30.0, description="Request timeout in seconds")
    candle_lighting_minutes: int = Field(default=18, description="Minutes before sunset for candle lighting (b)")
    havdalah_minutes: int = Field(default=50, description="Minutes past sunset for havdalah (m)")
    include_havdalah: bool = Field(default=True, description="Send M=on")

    def query_params(self) -> Dict[str, str]:
        """Fixed request parameters shared by every lookup."""
        params = {
            "cfg": "json",
            "b": str(self.candle_lighting_minutes),
            "m": str(self.havdalah_minutes),
            "timezone": "auto",
        }
        if self.include_havdalah:
            params["M"] = "on"
        return params


class GeocodingConfig(BaseModel):
    """Nominatim geocoding configuration."""
    base_url: str = Field(default="https://nominatim.openstreetmap.org")
    timeout_seconds: float = Field(default=15.0, description="Request timeout in seconds")
    country_codes: List[str] = Field(default_factory=lambda: ["us", "ca"])
    default_country_suffix: Optional[str] = Field(
        default="USA",
        description="Appended to queries that name neither the USA nor Canada"
    )
    user_agent: str = Field(default="zmanim-compare/0.1")


class CacheConfig(BaseModel):
    """Fetch cache configuration."""
    enabled: bool = True
    max_size: int = Field(default=256, description="Maximum cached location responses")
    ttl_seconds: int = Field(default=3600, description="Entry lifetime in seconds")


class ServiceConfig(BaseModel):
    """Complete service configuration."""
    hebcal: HebcalConfig = Field(default_factory=HebcalConfig)
    geocoding: GeocodingConfig = Field(default_factory=GeocodingConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    max_concurrent: int = Field(default=4, description="Maximum concurrent location fetches")
    
    # Logging
    log_level: str = "INFO"
    log_json: bool = Field(default=False, description="Render logs as JSON instead of console lines")

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """Create from environment variables, falling back to defaults."""
        _load_env_file()
        config = cls()
        
        if os.getenv("ZMANIM_HEBCAL_URL"):
            config.hebcal.base_url = os.environ["ZMANIM_HEBCAL_URL"]
        if os.getenv("ZMANIM_NOMINATIM_URL"):
            config.geocoding.base_url = os.environ["ZMANIM_NOMINATIM_URL"]
        if os.getenv("ZMANIM_USER_AGENT"):
            config.geocoding.user_agent = os.environ["ZMANIM_USER_AGENT"]
        if os.getenv("ZMANIM_MAX_CONCURRENT"):
            config.max_concurrent = int(os.environ["ZMANIM_MAX_CONCURRENT"])
        if os.getenv("ZMANIM_CACHE_TTL"):
            config.cache.ttl_seconds = int(os.environ["ZMANIM_CACHE_TTL"])
        if os.getenv("ZMANIM_LOG_LEVEL"):
            config.log_level = os.environ["ZMANIM_LOG_LEVEL"]
        config.log_json = os.getenv("ZMANIM_LOG_JSON", "").lower() in ("1", "true", "yes")
        
        return config
