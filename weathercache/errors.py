from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from .entities import WeatherSnapshot

GENERIC_ERROR_MESSAGE = "Unable to fetch weather data. Please try again later."
INVALID_LOCATION_MESSAGE = "Invalid location parameter."

ORIGIN_INPUT = "input"
ORIGIN_UPSTREAM = "upstream"


class ErrorKind(str, enum.Enum):
    INVALID_LOCATION = "invalid_location"
    CONFIGURATION = "configuration"
    QUOTA_EXCEEDED = "quota_exceeded"
    UNAVAILABLE = "unavailable"
    MALFORMED_RESPONSE = "malformed_response"


class FetchError(RuntimeError):
    """A classified failure to produce a weather snapshot.

    ``origin`` tells whether the caller's input was rejected before any
    upstream call (``"input"``) or the provider side failed (``"upstream"``).
    """

    def __init__(
        self,
        kind: ErrorKind,
        detail: str,
        *,
        location: Optional[str] = None,
        origin: str = ORIGIN_UPSTREAM,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(detail)
        self.kind = kind
        self.detail = detail
        self.location = location
        self.origin = origin
        self.cause = cause

    @property
    def is_client_error(self) -> bool:
        return self.origin == ORIGIN_INPUT

    def __repr__(self) -> str:
        return f"FetchError(kind={self.kind.value!r}, detail={self.detail!r}, origin={self.origin!r})"


@dataclass(frozen=True)
class FetchResult:
    """Either a snapshot or the error explaining why there is none."""

    snapshot: Optional[WeatherSnapshot] = None
    error: Optional[FetchError] = None

    def __post_init__(self) -> None:
        if (self.snapshot is None) == (self.error is None):
            raise ValueError("exactly one of snapshot or error must be set")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, snapshot: WeatherSnapshot) -> "FetchResult":
        return cls(snapshot=snapshot)

    @classmethod
    def failure(cls, error: FetchError) -> "FetchResult":
        return cls(error=error)


__all__ = [
    "ErrorKind",
    "FetchError",
    "FetchResult",
    "GENERIC_ERROR_MESSAGE",
    "INVALID_LOCATION_MESSAGE",
    "ORIGIN_INPUT",
    "ORIGIN_UPSTREAM",
]
