from __future__ import annotations

from typing import Any, Dict, Optional

from .base import RequestConfig, WeatherProvider
from ..config import WeatherConfig
from ..entities import WeatherSnapshot
from ..errors import ErrorKind, FetchError, FetchResult


def _text(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    return value


class WeatherAPIProvider(WeatherProvider):
    """Current conditions from WeatherAPI.com (``/v1/current.json``)."""

    name = "weatherapi"
    base_url = "http://api.weatherapi.com/v1/current.json"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        **kwargs,
    ) -> None:
        if timeout is not None:
            kwargs.setdefault("request_config", RequestConfig(timeout=timeout))
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = base_url if base_url is not None else self.base_url

    @classmethod
    def from_config(cls, config: WeatherConfig, **kwargs) -> "WeatherAPIProvider":
        return cls(api_key=config.api_key, base_url=config.api_url, timeout=config.timeout, **kwargs)

    # Public API ---------------------------------------------------------
    def fetch(self, location: str) -> FetchResult:
        try:
            return FetchResult.success(self._fetch(location))
        except FetchError as exc:
            return FetchResult.failure(exc)

    # helpers ------------------------------------------------------------
    def _fetch(self, location: str) -> WeatherSnapshot:
        if not self.api_key:
            raise FetchError(ErrorKind.CONFIGURATION, "Weather API key not configured", location=location)
        if not self.base_url:
            raise FetchError(ErrorKind.CONFIGURATION, "Weather API URL not configured", location=location)
        params = {"key": self.api_key, "q": location, "aqi": "no"}
        self._log.info("Requesting current weather for %r", location)
        response = self._request("GET", self.base_url, location, params=params)
        data = self._json(response, location)
        return self._build_snapshot(data, location)

    def _json(self, response, location: str) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            raise FetchError(
                ErrorKind.MALFORMED_RESPONSE, "invalid json", location=location, cause=exc
            ) from exc
        if not isinstance(data, dict):
            raise FetchError(ErrorKind.MALFORMED_RESPONSE, "response is not an object", location=location)
        return data

    def _build_snapshot(self, data: Dict[str, Any], location: str) -> WeatherSnapshot:
        place = data.get("location")
        current = data.get("current")
        if not isinstance(place, dict) or not isinstance(current, dict):
            raise FetchError(ErrorKind.MALFORMED_RESPONSE, "Invalid response from weather service", location=location)
        try:
            condition = current["condition"]
            return WeatherSnapshot(
                location=f"{_text(place['name'])}, {_text(place['country'])}",
                region=_text(place["region"]),
                country=_text(place["country"]),
                temperature_celsius=float(current["temp_c"]),
                temperature_fahrenheit=float(current["temp_f"]),
                feels_like_celsius=float(current["feelslike_c"]),
                feels_like_fahrenheit=float(current["feelslike_f"]),
                condition=_text(condition["text"]),
                condition_icon=_text(condition["icon"]),
                humidity=int(current["humidity"]),
                wind_speed_kph=float(current["wind_kph"]),
                wind_speed_mph=float(current["wind_mph"]),
                wind_direction=_text(current["wind_dir"]),
                pressure_mb=float(current["pressure_mb"]),
                visibility_km=float(current["vis_km"]),
                uv_index=float(current["uv"]),
                last_updated=_text(current["last_updated"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise FetchError(
                ErrorKind.MALFORMED_RESPONSE,
                f"missing or invalid field in response: {exc}",
                location=location,
                cause=exc,
            ) from exc


__all__ = ["WeatherAPIProvider"]
