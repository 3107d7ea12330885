"""Management command to fetch weather using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from backend.api.views import get_weather_service
from weathercache.services.weather import STATUS_SUCCESS


class Command(BaseCommand):
    help = "Fetch current weather for a location through the cache"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--location", type=str, help="Free-text location (defaults to WEATHER_DEFAULT_LOCATION)")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        payload = get_weather_service().get_current_weather(options.get("location"))
        if payload["status"] != STATUS_SUCCESS:
            raise CommandError(payload["message"])
        self.stdout.write(json.dumps(payload))
