from __future__ import annotations

import os

import django
import pytest
import requests_mock as requests_mock_lib


os.environ.setdefault("DJANGO_SECRET_KEY", "test-secret")
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings")
os.environ.setdefault("WEATHER_API_KEY", "test-key")
os.environ.setdefault("WEATHER_API_URL", "https://weatherapi.test/v1/current.json")

django.setup()


@pytest.fixture()
def requests_mock():
    with requests_mock_lib.Mocker() as mocker:
        yield mocker


@pytest.fixture(autouse=True)
def _fresh_weather_service():
    from backend.api.views import get_weather_service

    get_weather_service.cache_clear()
    yield
    get_weather_service.cache_clear()


@pytest.fixture()
def weather_payload():
    """A WeatherAPI.com ``current.json`` body for Perth."""
    return {
        "location": {"name": "Perth", "region": "Western Australia", "country": "Australia"},
        "current": {
            "temp_c": 22.5,
            "temp_f": 72.5,
            "condition": {"text": "Sunny", "icon": "//cdn.weatherapi.com/weather/64x64/day/113.png"},
            "humidity": 65,
            "wind_kph": 15.2,
            "wind_mph": 9.4,
            "wind_dir": "SW",
            "pressure_mb": 1013.0,
            "feelslike_c": 24.0,
            "feelslike_f": 75.2,
            "vis_km": 10.0,
            "uv": 6.0,
            "last_updated": "2025-09-16 15:30",
        },
    }
