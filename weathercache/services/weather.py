"""Caller-facing weather lookups on top of the cache."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..cache import WeatherCache
from ..config import WeatherConfig
from ..errors import GENERIC_ERROR_MESSAGE, INVALID_LOCATION_MESSAGE, FetchError
from ..providers.weatherapi import WeatherAPIProvider


STATUS_SUCCESS = "success"
STATUS_ERROR = "error"


@dataclass(frozen=True)
class WeatherReply:
    """A caller-facing payload together with the failure behind it, if any."""

    payload: Dict[str, Any]
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def is_client_error(self) -> bool:
        return self.error is not None and self.error.is_client_error


class WeatherService:
    """Turn cache results into ``{status, data, message}`` payloads.

    Upstream failures are logged with the location and cause and reported to
    the caller only through a generic message.
    """

    def __init__(
        self,
        cache: WeatherCache,
        *,
        default_location: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.cache = cache
        self.default_location = default_location
        self._log = logger or logging.getLogger(self.__class__.__name__)

    @classmethod
    def from_config(cls, config: WeatherConfig, **kwargs) -> "WeatherService":
        provider = WeatherAPIProvider.from_config(config)
        cache = WeatherCache(provider, ttl=config.cache_ttl)
        return cls(cache, default_location=config.default_location, **kwargs)

    # Public API ---------------------------------------------------------
    def get_current_weather(self, location: Optional[str] = None) -> Dict[str, Any]:
        return self.lookup(location).payload

    def lookup(self, location: Optional[str] = None) -> WeatherReply:
        location = self._resolve(location)
        result = self.cache.get(location)
        if result.ok:
            return WeatherReply({"status": STATUS_SUCCESS, "data": result.snapshot.as_dict(), "message": None})
        return WeatherReply(self._error_payload(result.error, location), result.error)

    def clear_cache(self, location: Optional[str] = None) -> bool:
        return self.cache.invalidate(self._resolve(location))

    def clear_all_cache(self) -> None:
        self.cache.invalidate_all()

    # Helpers ------------------------------------------------------------
    def _resolve(self, location: Optional[str]) -> str:
        if location is None:
            return self.default_location or ""
        return location

    def _error_payload(self, error: FetchError, location: str) -> Dict[str, Any]:
        if error.is_client_error:
            self._log.warning("Rejected weather lookup for %r: %s", location, error.detail)
            message = INVALID_LOCATION_MESSAGE
        else:
            self._log.error(
                "Weather API Error: %s (location=%r, kind=%s)",
                error.detail,
                location,
                error.kind.value,
                exc_info=error.cause,
            )
            message = GENERIC_ERROR_MESSAGE
        return {"status": STATUS_ERROR, "data": None, "message": message}


__all__ = ["WeatherReply", "WeatherService", "STATUS_SUCCESS", "STATUS_ERROR"]
