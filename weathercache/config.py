from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_API_URL = "http://api.weatherapi.com/v1/current.json"
DEFAULT_CACHE_TTL = 900
DEFAULT_TIMEOUT = 10.0
DEFAULT_LOCATION = "Perth, Australia"


@dataclass(frozen=True)
class WeatherConfig:
    """Settings consumed by the weather core.

    Values are read from the environment by the Django settings module; the
    core never looks at ``os.environ`` itself.
    """

    api_key: str = ""
    api_url: str = DEFAULT_API_URL
    cache_ttl: int = DEFAULT_CACHE_TTL
    timeout: float = DEFAULT_TIMEOUT
    default_location: str = DEFAULT_LOCATION

    def __post_init__(self) -> None:
        if self.cache_ttl <= 0:
            raise ValueError("cache_ttl must be positive")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @classmethod
    def from_settings(cls, settings: Any) -> "WeatherConfig":
        return cls(
            api_key=getattr(settings, "WEATHER_API_KEY", "") or "",
            api_url=getattr(settings, "WEATHER_API_URL", DEFAULT_API_URL) or "",
            cache_ttl=int(getattr(settings, "WEATHER_CACHE_TTL", DEFAULT_CACHE_TTL)),
            timeout=float(getattr(settings, "WEATHER_API_TIMEOUT", DEFAULT_TIMEOUT)),
            default_location=getattr(settings, "WEATHER_DEFAULT_LOCATION", DEFAULT_LOCATION),
        )


__all__ = ["WeatherConfig", "DEFAULT_API_URL", "DEFAULT_CACHE_TTL", "DEFAULT_TIMEOUT", "DEFAULT_LOCATION"]
