from __future__ import annotations

import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

API_URL = "https://weatherapi.test/v1/current.json"


def test_weather_fetch_prints_payload(requests_mock, weather_payload) -> None:
    requests_mock.get(API_URL, json=weather_payload)
    out = StringIO()

    call_command("weather_fetch", "--location", "Perth, Australia", stdout=out)

    payload = json.loads(out.getvalue())
    assert payload["status"] == "success"
    assert payload["data"]["condition"] == "Sunny"


def test_weather_fetch_reports_failure(requests_mock) -> None:
    requests_mock.get(API_URL, status_code=503)

    with pytest.raises(CommandError, match="Unable to fetch weather data"):
        call_command("weather_fetch", stdout=StringIO())
