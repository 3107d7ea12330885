from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests
from requests import Response

from ..errors import ErrorKind, FetchError


@dataclass
class RequestConfig:
    timeout: float = 10.0


class WeatherProvider:
    """Base class for HTTP providers: one bounded request, no retries."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or self._build_session(self.request_config)
        self._log = logging.getLogger(self.__class__.__name__)

    def _build_session(self, config: RequestConfig) -> requests.Session:
        return requests.Session()

    def _handle_response(self, response: Response, location: str) -> Response:
        status = response.status_code
        if 200 <= status < 300:
            return response
        self._log.warning("Provider returned %s for %r: %s", status, location, response.text[:200])
        if status == 400:
            raise FetchError(ErrorKind.INVALID_LOCATION, "Invalid location provided", location=location)
        if status == 401:
            raise FetchError(ErrorKind.CONFIGURATION, "Invalid API key", location=location)
        if status == 403:
            raise FetchError(ErrorKind.QUOTA_EXCEEDED, "API quota exceeded", location=location)
        raise FetchError(
            ErrorKind.UNAVAILABLE,
            f"Weather service temporarily unavailable (HTTP {status})",
            location=location,
        )

    def _request(self, method: str, url: str, location: str, **kwargs) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request timed out after %ss", self.request_config.timeout)
            raise FetchError(ErrorKind.UNAVAILABLE, "timeout", location=location, cause=exc) from exc
        except requests.RequestException as exc:
            self._log.error("Request failed: %s", exc)
            raise FetchError(ErrorKind.UNAVAILABLE, "request failed", location=location, cause=exc) from exc
        return self._handle_response(response, location)


__all__ = ["RequestConfig", "WeatherProvider"]
