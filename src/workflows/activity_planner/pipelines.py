"""The two committed activity planner pipelines.

``weather_pipeline`` and ``web_search_pipeline`` are the default instances
used by the Temporal activities, workflows and the starter. Build fresh ones
with the ``build_*`` functions to inject other collaborators.
"""

from __future__ import annotations

from src.resources.llm.agent import TextAgent, TextGenerator
from src.resources.pipeline.pipeline import Pipeline
from src.resources.pipeline.streaming import TextSink, console_sink
from src.workflows.activity_planner import config
from src.workflows.activity_planner.prompts import WEATHER_AGENT, WEB_SEARCH_AGENT
from src.workflows.activity_planner.steps import (
    fetch_weather_step,
    plan_activities_step,
    plan_web_search_activities_step,
    web_search_step,
)
from src.workflows.activity_planner.types import (
    ActivitiesOutput,
    CityInput,
    SearchInput,
)
from src.workflows.activity_planner.weather import OpenMeteoClient


WEATHER_PIPELINE_ID = "weather-workflow"
WEB_SEARCH_PIPELINE_ID = "web-search-workflow"

DEFAULT_SINK: TextSink | None = console_sink if config.ECHO_STREAM else None


def build_weather_pipeline(
    agent: TextGenerator | None = None,
    client: OpenMeteoClient | None = None,
    sink: TextSink | None = DEFAULT_SINK,
) -> Pipeline:
    """City -> forecast -> streamed activity plan."""
    return (
        Pipeline(
            WEATHER_PIPELINE_ID,
            input_model=CityInput,
            output_model=ActivitiesOutput,
            description="Plans activities for a city from its weather forecast",
        )
        .then(fetch_weather_step(client))
        .then(plan_activities_step(agent or TextAgent(WEATHER_AGENT), sink))
        .commit()
    )


def build_web_search_pipeline(
    agent: TextGenerator | None = None,
    sink: TextSink | None = DEFAULT_SINK,
) -> Pipeline:
    """Query -> web search findings -> streamed activity plan.

    Both steps use the same search-enabled agent: once in batch mode to
    gather findings, once streaming to write the plan.
    """
    agent = agent or TextAgent(WEB_SEARCH_AGENT)
    return (
        Pipeline(
            WEB_SEARCH_PIPELINE_ID,
            input_model=SearchInput,
            output_model=ActivitiesOutput,
            description="Plans activities for a location or topic from current web findings",
        )
        .then(web_search_step(agent))
        .then(plan_web_search_activities_step(agent, sink))
        .commit()
    )


weather_pipeline = build_weather_pipeline()
web_search_pipeline = build_web_search_pipeline()


__all__ = [
    "WEATHER_PIPELINE_ID",
    "WEB_SEARCH_PIPELINE_ID",
    "build_weather_pipeline",
    "build_web_search_pipeline",
    "weather_pipeline",
    "web_search_pipeline",
]
