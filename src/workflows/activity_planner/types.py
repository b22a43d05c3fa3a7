"""Typed models for the activity planner workflows.

These Pydantic models are the step contracts of both pipelines, the
workflow inputs/outputs, and the shapes expected back from the Open-Meteo
APIs. Keeping them in one module gives workflows, activities and external
clients a single source of truth for field names and validation rules.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Pipeline contracts
# ---------------------------------------------------------------------------


class CityInput(BaseModel):
    """Input to the weather pipeline."""

    city: str = Field(description="The city to get the weather for.")


class Forecast(BaseModel):
    """Weather summary for one location at request time."""

    date: str
    """ISO-8601 timestamp of the moment the forecast was requested."""

    max_temp: float
    """Highest hourly temperature over the forecast horizon (°C)."""

    min_temp: float
    """Lowest hourly temperature over the forecast horizon (°C)."""

    precipitation_chance: float
    """Highest hourly precipitation probability (%)."""

    condition: str
    """Human-readable label for the current weather code."""

    location: str
    """Location name as requested."""


class SearchInput(BaseModel):
    """Input to the web search pipeline."""

    query: str = Field(description="The location or topic to search for.")
    focus: str | None = Field(
        default=None,
        description="Specific focus area (e.g. outdoor activities, cultural events, food scene).",
    )


class SearchResult(BaseModel):
    """Findings gathered by the web search step."""

    search_results: str = Field(min_length=1, description="Summary of web search findings.")
    query: str
    focus: str | None = None


class ActivitiesOutput(BaseModel):
    """Final output of both pipelines."""

    activities: str = Field(min_length=1)
    """Formatted activity plan."""


# ---------------------------------------------------------------------------
# Open-Meteo response shapes
# ---------------------------------------------------------------------------


class GeocodingResult(BaseModel):
    latitude: float
    longitude: float
    name: str


class GeocodingResponse(BaseModel):
    # The API omits ``results`` entirely when nothing matches.
    results: list[GeocodingResult] = Field(default_factory=list)


class CurrentConditions(BaseModel):
    time: str | None = None
    precipitation: float | None = None
    weathercode: int


class HourlySeries(BaseModel):
    # Readings past the provider horizon come back as null.
    temperature_2m: list[float | None]
    precipitation_probability: list[float | None]


class WeatherResponse(BaseModel):
    current: CurrentConditions
    hourly: HourlySeries


__all__ = [
    "ActivitiesOutput",
    "CityInput",
    "CurrentConditions",
    "Forecast",
    "GeocodingResponse",
    "GeocodingResult",
    "HourlySeries",
    "SearchInput",
    "SearchResult",
    "WeatherResponse",
]
