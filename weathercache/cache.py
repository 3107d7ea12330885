from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Callable, Dict, Optional, Protocol

from .config import DEFAULT_CACHE_TTL
from .entities import CacheStats, WeatherSnapshot
from .errors import ORIGIN_INPUT, ErrorKind, FetchError, FetchResult
from .keys import normalize_location


logger = logging.getLogger(__name__)

MIN_LOCATION_LENGTH = 2
MAX_LOCATION_LENGTH = 255


class Fetcher(Protocol):
    def fetch(self, location: str) -> FetchResult:
        ...


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: WeatherSnapshot
    inserted_at: float
    ttl: float

    @property
    def expires_at(self) -> float:
        return self.inserted_at + self.ttl

    def is_live(self, now: float) -> bool:
        return now < self.expires_at


class _InFlight:
    """A pending upstream call that concurrent misses wait on."""

    def __init__(self) -> None:
        self.done = threading.Event()
        self.result: Optional[FetchResult] = None
        self.waiters = 0

    def resolve(self, result: FetchResult) -> None:
        self.result = result
        self.done.set()


class WeatherCache:
    """Cache-aside lookup in front of an upstream weather fetcher.

    A fresh entry is served without touching the fetcher. On a miss the raw
    location is handed to the fetcher and a successful snapshot is stored for
    ``ttl`` seconds; failures are never stored. Concurrent misses for the same
    key share a single upstream call.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        ttl: float = DEFAULT_CACHE_TTL,
        time_func: Callable[[], float] = time.time,
    ) -> None:
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self._fetcher = fetcher
        self._ttl = ttl
        self._time_func = time_func
        self._entries: Dict[str, CacheEntry] = {}
        self._in_flight: Dict[str, _InFlight] = {}
        self._hits = 0
        self._misses = 0
        self._lock = threading.Lock()

    @property
    def ttl(self) -> float:
        return self._ttl

    # Public API ---------------------------------------------------------
    def get(self, location: str) -> FetchResult:
        invalid = self._validate(location)
        if invalid is not None:
            return FetchResult.failure(invalid)

        key = normalize_location(location)
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                if entry.is_live(self._time_func()):
                    self._hits += 1
                    logger.debug("Cache hit for %r (key %s)", location, key)
                    return FetchResult.success(self._as_cached(entry))
                del self._entries[key]
            self._misses += 1
            call = self._in_flight.get(key)
            leader = call is None
            if leader:
                call = self._in_flight[key] = _InFlight()
            else:
                call.waiters += 1

        if not leader:
            logger.debug("Joining in-flight fetch for %r (key %s)", location, key)
            call.done.wait()
            return call.result

        logger.debug("Cache miss for %r (key %s)", location, key)
        return self._fetch_and_store(key, location, call)

    def invalidate(self, location: str) -> bool:
        key = normalize_location(location)
        with self._lock:
            existed = self._entries.pop(key, None) is not None
        logger.info("Invalidated cache for %r (existed=%s)", location, existed)
        return existed

    def invalidate_all(self) -> None:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info("Cleared %d cached weather entries", count)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(hits=self._hits, misses=self._misses, keys=len(self._entries))

    # Helpers ------------------------------------------------------------
    def _fetch_and_store(self, key: str, location: str, call: _InFlight) -> FetchResult:
        result: Optional[FetchResult] = None
        cause: Optional[BaseException] = None
        try:
            result = self._fetcher.fetch(location)
        except BaseException as exc:
            cause = exc
            raise
        finally:
            with self._lock:
                if result is not None and result.ok:
                    self._entries[key] = CacheEntry(
                        key=key,
                        value=result.snapshot,
                        inserted_at=self._time_func(),
                        ttl=self._ttl,
                    )
                self._in_flight.pop(key, None)
            if call.waiters:
                logger.debug("Sharing fetch result for %r with %d waiter(s)", location, call.waiters)
            if result is None:
                call.resolve(
                    FetchResult.failure(
                        FetchError(ErrorKind.UNAVAILABLE, "fetch did not complete", location=location, cause=cause)
                    )
                )
            else:
                call.resolve(result)
        return result

    def _as_cached(self, entry: CacheEntry) -> WeatherSnapshot:
        expires_at = datetime.fromtimestamp(entry.expires_at, tz=timezone.utc)
        return replace(entry.value, cached=True, cache_expires_at=expires_at)

    def _validate(self, location: str) -> Optional[FetchError]:
        if not isinstance(location, str):
            return FetchError(ErrorKind.INVALID_LOCATION, "location must be a string", origin=ORIGIN_INPUT)
        length = len(location.strip())
        if length < MIN_LOCATION_LENGTH or length > MAX_LOCATION_LENGTH:
            return FetchError(
                ErrorKind.INVALID_LOCATION,
                f"location must be {MIN_LOCATION_LENGTH}-{MAX_LOCATION_LENGTH} characters",
                location=location,
                origin=ORIGIN_INPUT,
            )
        return None


__all__ = ["CacheEntry", "Fetcher", "WeatherCache", "MIN_LOCATION_LENGTH", "MAX_LOCATION_LENGTH"]
