from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class WeatherSnapshot:
    """Current conditions for a resolved location.

    Temperatures are reported by the provider in both Celsius and Fahrenheit,
    wind speed in km/h and mph, pressure in millibar and visibility in
    kilometres. ``cached`` and ``cache_expires_at`` describe where the value
    came from and are only ever set by the cache layer.
    """

    location: str
    region: str
    country: str
    temperature_celsius: float
    temperature_fahrenheit: float
    feels_like_celsius: float
    feels_like_fahrenheit: float
    condition: str
    condition_icon: str
    humidity: int
    wind_speed_kph: float
    wind_speed_mph: float
    wind_direction: str
    pressure_mb: float
    visibility_km: float
    uv_index: float
    last_updated: str
    cached: bool = False
    cache_expires_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.cached != (self.cache_expires_at is not None):
            raise ValueError("cache_expires_at must be set exactly when cached is true")

    def as_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        expires_at: Optional[datetime] = payload["cache_expires_at"]
        if expires_at is not None:
            payload["cache_expires_at"] = expires_at.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
        return payload


@dataclass(frozen=True)
class CacheStats:
    """Simple container for cache related counters."""

    hits: int = 0
    misses: int = 0
    keys: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {"hits": self.hits, "misses": self.misses, "keys": self.keys}


__all__ = ["CacheStats", "WeatherSnapshot"]
