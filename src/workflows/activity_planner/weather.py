"""Open-Meteo geocoding and forecast lookups.

No API key is required. Network I/O goes through ``_get_json`` so tests can
monkeypatch a single helper; everything that derives the forecast summary
is pure and lives in :func:`summarize_forecast` and
:func:`get_weather_condition`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

import aiohttp
import pydantic

from src.resources.pipeline.errors import ExternalServiceError, NotFoundError
from src.workflows.activity_planner import config
from src.workflows.activity_planner.types import (
    Forecast,
    GeocodingResponse,
    GeocodingResult,
    WeatherResponse,
)


logger = logging.getLogger(__name__)

WEATHER_CONDITIONS: dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    95: "Thunderstorm",
}

UNKNOWN_CONDITION = "Unknown"


def get_weather_condition(code: int) -> str:
    """Map a WMO weather code to a label; unlisted codes are ``"Unknown"``."""
    return WEATHER_CONDITIONS.get(code, UNKNOWN_CONDITION)


def _readings(values: Sequence[float | None], name: str) -> list[float]:
    present = [v for v in values if v is not None]
    if not present:
        raise ExternalServiceError(f"forecast response has no hourly {name} readings")
    return present


def summarize_forecast(
    location: str,
    weather: WeatherResponse,
    requested_at: datetime | None = None,
) -> Forecast:
    """Derive the forecast summary from a forecast response.

    Temperatures are the extremes of the hourly series; the precipitation
    chance is the worst hour, not an average.
    """
    temperatures = _readings(weather.hourly.temperature_2m, "temperature")
    precipitation = _readings(weather.hourly.precipitation_probability, "precipitation probability")
    requested_at = requested_at or datetime.now(timezone.utc)
    return Forecast(
        date=requested_at.isoformat(),
        max_temp=max(temperatures),
        min_temp=min(temperatures),
        precipitation_chance=max(precipitation),
        condition=get_weather_condition(weather.current.weathercode),
        location=location,
    )


async def _get_json(url: str, params: dict[str, Any], timeout: float) -> tuple[int, Any]:
    """GET ``url`` and parse a JSON response when possible.

    Returns a tuple of ``(status_code, data)`` where ``data`` is the parsed
    JSON body when available, otherwise the raw response text.
    """
    async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout)) as session:
        async with session.get(url, params=params) as resp:
            status = resp.status
            try:
                data = await resp.json(content_type=None)
            except ValueError:
                data = await resp.text(errors="replace")
            return status, data


class OpenMeteoClient:
    """Resolves place names and fetches hourly forecasts."""

    def __init__(
        self,
        geocoding_url: str = config.GEOCODING_URL,
        forecast_url: str = config.FORECAST_URL,
        timeout: float = config.HTTP_TIMEOUT_SECONDS,
    ) -> None:
        self.geocoding_url = geocoding_url
        self.forecast_url = forecast_url
        self.timeout = timeout

    async def _fetch(self, service: str, url: str, params: dict[str, Any]) -> Any:
        try:
            status, data = await _get_json(url, params, self.timeout)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise ExternalServiceError(f"{service} request failed: {exc!r}") from exc
        if status < 200 or status >= 300:
            raise ExternalServiceError(f"{service} returned HTTP {status}: {data}")
        if not isinstance(data, dict):
            raise ExternalServiceError(f"{service} returned a non-JSON body")
        return data

    async def geocode(self, name: str) -> GeocodingResult:
        """Return the first candidate for ``name``."""
        data = await self._fetch("geocoding", self.geocoding_url, {"name": name, "count": 1})
        try:
            response = GeocodingResponse.model_validate(data)
        except pydantic.ValidationError as exc:
            raise ExternalServiceError(f"unexpected geocoding response: {exc}") from exc
        if not response.results:
            raise NotFoundError(f"Location '{name}' not found")
        return response.results[0]

    async def fetch_forecast(self, latitude: float, longitude: float) -> WeatherResponse:
        data = await self._fetch(
            "forecast",
            self.forecast_url,
            {
                "latitude": latitude,
                "longitude": longitude,
                "current": "precipitation,weathercode",
                "hourly": "precipitation_probability,temperature_2m",
                "timezone": "auto",
            },
        )
        try:
            return WeatherResponse.model_validate(data)
        except pydantic.ValidationError as exc:
            raise ExternalServiceError(f"unexpected forecast response: {exc}") from exc

    async def forecast_for(self, city: str) -> Forecast:
        """Geocode ``city`` and summarize the forecast at its coordinates."""
        place = await self.geocode(city)
        logger.info(
            "Resolved %r to %s (%.4f, %.4f)", city, place.name, place.latitude, place.longitude
        )
        weather = await self.fetch_forecast(place.latitude, place.longitude)
        return summarize_forecast(city, weather)


__all__ = [
    "UNKNOWN_CONDITION",
    "WEATHER_CONDITIONS",
    "OpenMeteoClient",
    "get_weather_condition",
    "summarize_forecast",
]
