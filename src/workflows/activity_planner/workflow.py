"""Temporal workflows hosting the activity planner pipelines.

The workflows hold no state of their own: they run the committed pipeline
with an :class:`ActivityStepExecutor`, so payload validation happens in the
workflow and every step executes as an activity. A pipeline error fails the
workflow with a non-retryable ``ApplicationError`` typed after the error
class (``NotFoundError``, ``ValidationError``, ...).
"""

import asyncio
from datetime import timedelta

from temporalio import workflow

with workflow.unsafe.imports_passed_through():
    from src.resources.pipeline.errors import PipelineError
    from src.resources.pipeline.pipeline import Pipeline
    from src.resources.pipeline.temporal import ActivityStepExecutor, to_application_error
    from src.workflows.activity_planner.config import ACTIVITY_TIMEOUT_SECONDS
    from src.workflows.activity_planner.pipelines import (
        weather_pipeline,
        web_search_pipeline,
    )
    from src.workflows.activity_planner.types import (
        ActivitiesOutput,
        CityInput,
        SearchInput,
    )


async def _run_pipeline(pipeline: Pipeline, input_data) -> ActivitiesOutput:  # noqa: ANN001
    executor = ActivityStepExecutor(
        start_to_close_timeout=timedelta(seconds=ACTIVITY_TIMEOUT_SECONDS),
    )
    try:
        return await pipeline.run(input_data, executor=executor, logger=workflow.logger)
    except PipelineError as exc:
        raise to_application_error(exc) from exc


@workflow.defn
class WeatherActivitiesWorkflow:
    """City -> forecast -> activity plan."""

    @workflow.run
    async def run(self, input: CityInput) -> ActivitiesOutput:  # noqa: A002
        workflow.logger.info("Workflow: planning weather-based activities for %s", input.city)
        return await _run_pipeline(weather_pipeline, input)


@workflow.defn
class WebSearchActivitiesWorkflow:
    """Query -> web findings -> activity plan."""

    @workflow.run
    async def run(self, input: SearchInput) -> ActivitiesOutput:  # noqa: A002
        workflow.logger.info(
            "Workflow: planning activities from web search for %s (focus=%s)",
            input.query,
            input.focus,
        )
        return await _run_pipeline(web_search_pipeline, input)


WORKFLOWS = [WeatherActivitiesWorkflow, WebSearchActivitiesWorkflow]


async def main() -> None:  # pragma: no cover
    """Connects to the client and executes the weather workflow once."""
    from temporalio.client import Client  # noqa: PLC0415
    from temporalio.contrib.pydantic import pydantic_data_converter  # noqa: PLC0415

    from src.workflows.activity_planner.config import ADDRESS, TASK_QUEUE  # noqa: PLC0415

    client = await Client.connect(ADDRESS, data_converter=pydantic_data_converter)
    result = await client.execute_workflow(
        WeatherActivitiesWorkflow.run,
        CityInput(city="Paris"),
        id="weather-workflow-id",
        task_queue=TASK_QUEUE,
    )
    print(f"\nWorkflow Result:\n{result.activities}\n")  # noqa: T201


if __name__ == "__main__":  # pragma: no cover
    asyncio.run(main())
