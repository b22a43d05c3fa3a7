"""Temporal activities for the activity planner pipelines.

Each activity runs one pipeline step and carries that step's id as its
name, which is how :class:`ActivityStepExecutor` finds it from a workflow.
All network I/O (Open-Meteo, the LLM provider) happens here so workflows
remain deterministic. Failures surface as non-retryable
``ApplicationError``s typed after the pipeline error class.
"""

from __future__ import annotations

from temporalio import activity

from src.resources.pipeline.temporal import run_step_activity
from src.workflows.activity_planner.pipelines import weather_pipeline, web_search_pipeline
from src.workflows.activity_planner.steps import (
    FETCH_WEATHER,
    PLAN_ACTIVITIES,
    PLAN_WEB_SEARCH_ACTIVITIES,
    WEB_SEARCH_INFO,
)
from src.workflows.activity_planner.types import (
    ActivitiesOutput,
    CityInput,
    Forecast,
    SearchInput,
    SearchResult,
)


@activity.defn(name=FETCH_WEATHER)
async def fetch_weather(input: CityInput) -> Forecast:  # noqa: A002
    """Resolve a city and summarize its forecast."""
    activity.logger.info("Activity: fetching weather for %s", input.city)
    return await run_step_activity(weather_pipeline.get_step(FETCH_WEATHER), input)


@activity.defn(name=PLAN_ACTIVITIES)
async def plan_activities(input: Forecast) -> ActivitiesOutput:  # noqa: A002
    """Stream a weather-based activity plan."""
    activity.logger.info("Activity: planning activities for %s", input.location)
    return await run_step_activity(weather_pipeline.get_step(PLAN_ACTIVITIES), input)


@activity.defn(name=WEB_SEARCH_INFO)
async def web_search_info(input: SearchInput) -> SearchResult:  # noqa: A002
    """Gather current web findings for a query."""
    activity.logger.info("Activity: web search for %s (focus=%s)", input.query, input.focus)
    return await run_step_activity(web_search_pipeline.get_step(WEB_SEARCH_INFO), input)


@activity.defn(name=PLAN_WEB_SEARCH_ACTIVITIES)
async def plan_web_search_activities(input: SearchResult) -> ActivitiesOutput:  # noqa: A002
    """Stream an activity plan from web search findings."""
    activity.logger.info("Activity: planning activities from web findings for %s", input.query)
    return await run_step_activity(
        web_search_pipeline.get_step(PLAN_WEB_SEARCH_ACTIVITIES), input
    )


ACTIVITIES = [fetch_weather, plan_activities, web_search_info, plan_web_search_activities]


__all__ = [
    "ACTIVITIES",
    "fetch_weather",
    "plan_activities",
    "plan_web_search_activities",
    "web_search_info",
]
