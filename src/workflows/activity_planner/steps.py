"""Step definitions for the weather and web search pipelines.

Steps are built by factories so their collaborators (weather client, agent,
stream sink) are bound once and can be swapped in tests. Step ids double as
Temporal activity names.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable

from pydantic import BaseModel

from src.resources.llm.agent import TextGenerator
from src.resources.pipeline.step import Step, step
from src.resources.pipeline.streaming import TextSink, accumulate_text
from src.workflows.activity_planner.prompts import (
    SEARCH_PLAN_PROMPT,
    SEARCH_PROMPT,
    WEATHER_PLAN_PROMPT,
)
from src.workflows.activity_planner.types import (
    ActivitiesOutput,
    CityInput,
    Forecast,
    SearchInput,
    SearchResult,
)
from src.workflows.activity_planner.weather import OpenMeteoClient


logger = logging.getLogger(__name__)

FETCH_WEATHER = "fetch-weather"
PLAN_ACTIVITIES = "plan-activities"
WEB_SEARCH_INFO = "web-search-info"
PLAN_WEB_SEARCH_ACTIVITIES = "plan-web-search-activities"


def build_search_phrase(query: str, focus: str | None = None) -> str:
    if focus:
        return f"{query} {focus} current information activities attractions events"
    return f"{query} current activities attractions events what to do"


def weather_plan_prompt(forecast: Forecast) -> str:
    return WEATHER_PLAN_PROMPT.format(
        location=forecast.location,
        forecast_json=json.dumps(forecast.model_dump(), indent=2, ensure_ascii=False),
    )


def search_plan_prompt(result: SearchResult) -> str:
    return SEARCH_PLAN_PROMPT.format(search_results=result.search_results)


def fetch_weather_step(client: OpenMeteoClient | None = None) -> Step:
    weather = client or OpenMeteoClient()

    @step(id=FETCH_WEATHER, input_model=CityInput, output_model=Forecast)
    async def fetch_weather(input: CityInput) -> Forecast:  # noqa: A002
        """Fetches weather forecast for a given city."""
        return await weather.forecast_for(input.city)

    return fetch_weather


def planning_step(
    *,
    id: str,  # noqa: A002
    description: str,
    input_model: type[BaseModel],
    agent: TextGenerator,
    build_prompt: Callable[[BaseModel], str],
    sink: TextSink | None = None,
) -> Step:
    """Build a step that streams an activity plan for a structured context.

    Fragments are concatenated in arrival order and mirrored to ``sink``.
    The generated layout is not checked; the output only has to be
    non-empty text.
    """

    async def plan(context: BaseModel) -> ActivitiesOutput:
        prompt = build_prompt(context)
        activities = await accumulate_text(agent.stream(prompt), sink)
        return ActivitiesOutput(activities=activities)

    return Step(
        id=id,
        description=description,
        input_model=input_model,
        output_model=ActivitiesOutput,
        execute=plan,
    )


def plan_activities_step(agent: TextGenerator, sink: TextSink | None = None) -> Step:
    return planning_step(
        id=PLAN_ACTIVITIES,
        description="Suggests activities based on weather conditions.",
        input_model=Forecast,
        agent=agent,
        build_prompt=weather_plan_prompt,
        sink=sink,
    )


def web_search_step(agent: TextGenerator) -> Step:
    @step(id=WEB_SEARCH_INFO, input_model=SearchInput, output_model=SearchResult)
    async def web_search_info(input: SearchInput) -> SearchResult:  # noqa: A002
        """Uses web search to gather current information about a location/topic."""
        search_query = build_search_phrase(input.query, input.focus)
        logger.info("🔍 Searching for: %s", search_query)
        text = await agent.generate(SEARCH_PROMPT.format(search_query=search_query))
        return SearchResult(search_results=text, query=input.query, focus=input.focus)

    return web_search_info


def plan_web_search_activities_step(agent: TextGenerator, sink: TextSink | None = None) -> Step:
    def build_prompt(result: SearchResult) -> str:
        logger.info("🎯 Planning activities for: %s", result.query)
        return search_plan_prompt(result)

    return planning_step(
        id=PLAN_WEB_SEARCH_ACTIVITIES,
        description="Plans activities based on web search findings.",
        input_model=SearchResult,
        agent=agent,
        build_prompt=build_prompt,
        sink=sink,
    )


__all__ = [
    "FETCH_WEATHER",
    "PLAN_ACTIVITIES",
    "PLAN_WEB_SEARCH_ACTIVITIES",
    "WEB_SEARCH_INFO",
    "build_search_phrase",
    "fetch_weather_step",
    "plan_activities_step",
    "plan_web_search_activities_step",
    "planning_step",
    "search_plan_prompt",
    "weather_plan_prompt",
    "web_search_step",
]
