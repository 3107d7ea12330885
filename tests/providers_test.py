from __future__ import annotations

import logging
from urllib.parse import parse_qs, urlsplit

import pytest
import requests

from weathercache.config import WeatherConfig
from weathercache.errors import ErrorKind
from weathercache.providers.weatherapi import WeatherAPIProvider

API_URL = "https://weatherapi.test/v1/current.json"


@pytest.fixture
def provider() -> WeatherAPIProvider:
    return WeatherAPIProvider(api_key="test", base_url=API_URL, timeout=3)


def test_successful_fetch_maps_every_field(requests_mock, provider, weather_payload):
    requests_mock.get(API_URL, json=weather_payload)

    result = provider.fetch("Perth, Australia")

    assert result.ok
    snapshot = result.snapshot
    assert snapshot.location == "Perth, Australia"
    assert snapshot.region == "Western Australia"
    assert snapshot.country == "Australia"
    assert snapshot.temperature_celsius == 22.5
    assert snapshot.temperature_fahrenheit == 72.5
    assert snapshot.feels_like_celsius == 24.0
    assert snapshot.feels_like_fahrenheit == 75.2
    assert snapshot.condition == "Sunny"
    assert snapshot.condition_icon == "//cdn.weatherapi.com/weather/64x64/day/113.png"
    assert snapshot.humidity == 65
    assert snapshot.wind_speed_kph == 15.2
    assert snapshot.wind_speed_mph == 9.4
    assert snapshot.wind_direction == "SW"
    assert snapshot.pressure_mb == 1013.0
    assert snapshot.visibility_km == 10.0
    assert snapshot.uv_index == 6.0
    assert snapshot.last_updated == "2025-09-16 15:30"
    assert snapshot.cached is False
    assert snapshot.cache_expires_at is None


def test_request_sends_raw_location_key_and_timeout(requests_mock, provider, weather_payload):
    requests_mock.get(API_URL, json=weather_payload)

    provider.fetch("  Perth, AUSTRALIA ")

    request = requests_mock.last_request
    query = parse_qs(urlsplit(request.url).query, keep_blank_values=True)
    assert query == {"key": ["test"], "q": ["  Perth, AUSTRALIA "], "aqi": ["no"]}
    assert request.timeout == 3


def test_integer_values_are_coerced(requests_mock, provider, weather_payload):
    weather_payload["current"].update({"temp_c": 20, "wind_kph": 5, "uv": 3})
    requests_mock.get(API_URL, json=weather_payload)

    snapshot = provider.fetch("Perth").snapshot

    assert isinstance(snapshot.temperature_celsius, float)
    assert isinstance(snapshot.wind_speed_kph, float)
    assert snapshot.uv_index == 3.0


@pytest.mark.parametrize(
    "status_code, kind",
    [
        (400, ErrorKind.INVALID_LOCATION),
        (401, ErrorKind.CONFIGURATION),
        (403, ErrorKind.QUOTA_EXCEEDED),
        (404, ErrorKind.UNAVAILABLE),
        (429, ErrorKind.UNAVAILABLE),
        (500, ErrorKind.UNAVAILABLE),
        (503, ErrorKind.UNAVAILABLE),
    ],
)
def test_http_errors_are_classified(requests_mock, provider, status_code, kind):
    requests_mock.get(API_URL, status_code=status_code, json={"error": {"message": "nope"}})

    result = provider.fetch("Perth, Australia")

    assert not result.ok
    assert result.error.kind is kind
    assert result.error.location == "Perth, Australia"
    assert not result.error.is_client_error


def test_upstream_invalid_location_is_not_a_client_error(requests_mock, provider):
    requests_mock.get(API_URL, status_code=400, json={"error": {"message": "No matching location found."}})

    error = provider.fetch("InvalidLocation123").error

    assert error.kind is ErrorKind.INVALID_LOCATION
    assert error.origin == "upstream"


@pytest.mark.parametrize(
    "exc",
    [requests.exceptions.ConnectTimeout, requests.exceptions.ReadTimeout, requests.exceptions.ConnectionError],
)
def test_network_failures_are_unavailable(requests_mock, provider, exc):
    requests_mock.get(API_URL, exc=exc)

    result = provider.fetch("Perth, Australia")

    assert result.error.kind is ErrorKind.UNAVAILABLE
    assert isinstance(result.error.cause, exc)


@pytest.mark.parametrize("api_key", [None, ""])
def test_missing_api_key_fails_without_request(requests_mock, api_key):
    provider = WeatherAPIProvider(api_key=api_key, base_url=API_URL)

    result = provider.fetch("Perth, Australia")

    assert result.error.kind is ErrorKind.CONFIGURATION
    assert requests_mock.call_count == 0


def test_missing_api_url_is_a_configuration_error(requests_mock):
    provider = WeatherAPIProvider.from_config(WeatherConfig(api_key="test", api_url=""))

    assert provider.fetch("Perth, Australia").error.kind is ErrorKind.CONFIGURATION
    assert requests_mock.call_count == 0


@pytest.mark.parametrize(
    "body",
    [
        {"invalid": "response"},
        {"location": {"name": "Perth", "region": "WA", "country": "Australia"}},
        {"current": {"temp_c": 1.0}},
        {"location": "Perth", "current": {}},
        [],
    ],
)
def test_malformed_bodies(requests_mock, provider, body):
    requests_mock.get(API_URL, json=body)

    assert provider.fetch("Perth, Australia").error.kind is ErrorKind.MALFORMED_RESPONSE


def test_missing_current_field_is_malformed(requests_mock, provider, weather_payload):
    del weather_payload["current"]["wind_dir"]
    requests_mock.get(API_URL, json=weather_payload)

    error = provider.fetch("Perth, Australia").error

    assert error.kind is ErrorKind.MALFORMED_RESPONSE
    assert isinstance(error.cause, KeyError)


@pytest.mark.parametrize(
    "section, field",
    [
        ("location", "region"),
        ("location", "name"),
        ("current", "wind_dir"),
        ("current", "last_updated"),
    ],
)
def test_null_text_fields_are_malformed(requests_mock, provider, weather_payload, section, field):
    weather_payload[section][field] = None
    requests_mock.get(API_URL, json=weather_payload)

    result = provider.fetch("Perth, Australia")

    assert result.snapshot is None
    assert result.error.kind is ErrorKind.MALFORMED_RESPONSE
    assert isinstance(result.error.cause, TypeError)


def test_null_condition_text_is_malformed(requests_mock, provider, weather_payload):
    weather_payload["current"]["condition"]["text"] = None
    requests_mock.get(API_URL, json=weather_payload)

    assert provider.fetch("Perth, Australia").error.kind is ErrorKind.MALFORMED_RESPONSE


def test_non_json_body_is_malformed(requests_mock, provider):
    requests_mock.get(API_URL, text="<html>gateway</html>")

    error = provider.fetch("Perth, Australia").error

    assert error.kind is ErrorKind.MALFORMED_RESPONSE
    assert error.cause is not None


def test_from_config_uses_configured_values(requests_mock, weather_payload):
    config = WeatherConfig(api_key="cfg-key", api_url=API_URL, cache_ttl=60, timeout=7)
    requests_mock.get(API_URL, json=weather_payload)

    WeatherAPIProvider.from_config(config).fetch("Perth")

    assert requests_mock.last_request.timeout == 7
    assert "key=cfg-key" in requests_mock.last_request.url


def test_request_and_failures_log_under_provider_name(requests_mock, provider, weather_payload, caplog):
    requests_mock.get(API_URL, [{"json": weather_payload}, {"status_code": 503, "text": "down"}])

    with caplog.at_level(logging.INFO, logger="WeatherAPIProvider"):
        provider.fetch("Perth, Australia")
        provider.fetch("Perth, Australia")

    assert provider._log.name == "WeatherAPIProvider"
    assert [record.levelno for record in caplog.records if record.name == "WeatherAPIProvider"] == [
        logging.INFO,
        logging.INFO,
        logging.WARNING,
    ]
