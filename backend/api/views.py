"""REST API views for weather information."""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from django.conf import settings
from django.utils import timezone
from rest_framework import serializers, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from weathercache.cache import MAX_LOCATION_LENGTH, MIN_LOCATION_LENGTH
from weathercache.config import WeatherConfig
from weathercache.errors import INVALID_LOCATION_MESSAGE
from weathercache.services.weather import STATUS_SUCCESS, WeatherReply, WeatherService


@lru_cache(maxsize=1)
def get_weather_service() -> WeatherService:
    return WeatherService.from_config(WeatherConfig.from_settings(settings))


class LocationQuerySerializer(serializers.Serializer):
    location = serializers.CharField(
        required=False,
        min_length=MIN_LOCATION_LENGTH,
        max_length=MAX_LOCATION_LENGTH,
    )


def _timestamp() -> str:
    return timezone.now().astimezone(settings.DEFAULT_TIMEZONE).isoformat().replace("+00:00", "Z")


def _read_location(request) -> Optional[str]:
    """Return the requested location, the default one, or ``None`` if invalid."""
    serializer = LocationQuerySerializer(data=request.query_params)
    if not serializer.is_valid():
        return None
    return serializer.validated_data.get("location", settings.WEATHER_DEFAULT_LOCATION)


def _invalid_location() -> Response:
    payload = {"status": "error", "data": None, "message": INVALID_LOCATION_MESSAGE, "timestamp": _timestamp()}
    return Response(payload, status=status.HTTP_422_UNPROCESSABLE_ENTITY)


def _status_for(reply: WeatherReply) -> int:
    if reply.ok:
        return status.HTTP_200_OK
    if reply.is_client_error:
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


class WeatherView(APIView):
    """Current weather for a free-text location."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the weather snapshot for ``?location=`` or the default location."""
        location = _read_location(request)
        if location is None:
            return _invalid_location()

        reply = get_weather_service().lookup(location)
        payload = dict(reply.payload, timestamp=_timestamp())
        return Response(payload, status=_status_for(reply))


class WeatherCacheView(APIView):
    """Explicit invalidation of a cached location."""

    permission_classes = [AllowAny]

    def delete(self, request, *args, **kwargs):
        location = _read_location(request)
        if location is None:
            return _invalid_location()

        cleared = get_weather_service().clear_cache(location)
        payload = {
            "status": STATUS_SUCCESS,
            "data": {"cache_cleared": cleared, "location": location},
            "message": "Cache cleared successfully" if cleared else "Cache was already empty",
            "timestamp": _timestamp(),
        }
        return Response(payload, status=status.HTTP_200_OK)
