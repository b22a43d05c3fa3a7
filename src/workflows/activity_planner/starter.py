"""CLI starter for the activity planner workflows.

Runs either pipeline for one input and prints the activity plan. By default
the run goes through Temporal (a worker must be serving the task queue, see
``worker.py``); ``--local`` runs the pipeline in this process instead.

Examples::

    python -m src.workflows.activity_planner.starter weather --city Paris
    python -m src.workflows.activity_planner.starter search --query Lisbon --focus "food scene" --local
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import uuid

from pydantic import BaseModel
from temporalio.client import Client, WorkflowFailureError
from temporalio.contrib.pydantic import pydantic_data_converter

from src.resources.pipeline.errors import PipelineError
from src.workflows.activity_planner.config import ADDRESS, LOG_LEVEL, TASK_QUEUE
from src.workflows.activity_planner.pipelines import weather_pipeline, web_search_pipeline
from src.workflows.activity_planner.types import CityInput, SearchInput
from src.workflows.activity_planner.workflow import (
    WeatherActivitiesWorkflow,
    WebSearchActivitiesWorkflow,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Plan activities for a place via the weather or web search pipeline.",
    )
    parser.add_argument(
        "--local",
        action="store_true",
        help="Run the pipeline in this process instead of through Temporal.",
    )
    sub = parser.add_subparsers(dest="pipeline", required=True)

    weather = sub.add_parser("weather", help="Plan activities from the weather forecast.")
    weather.add_argument("--city", required=True, help="The city to get the weather for.")

    search = sub.add_parser("search", help="Plan activities from current web findings.")
    search.add_argument("--query", required=True, help="The location or topic to search for.")
    search.add_argument("--focus", default=None, help="Specific focus area (e.g. food scene).")
    return parser


async def run_local(args: argparse.Namespace) -> BaseModel:
    if args.pipeline == "weather":
        return await weather_pipeline.run(CityInput(city=args.city))
    return await web_search_pipeline.run(SearchInput(query=args.query, focus=args.focus))


async def run_temporal(args: argparse.Namespace) -> BaseModel:
    client = await Client.connect(ADDRESS, data_converter=pydantic_data_converter)
    if args.pipeline == "weather":
        return await client.execute_workflow(
            WeatherActivitiesWorkflow.run,
            CityInput(city=args.city),
            id=f"weather-workflow-{uuid.uuid4()}",
            task_queue=TASK_QUEUE,
        )
    return await client.execute_workflow(
        WebSearchActivitiesWorkflow.run,
        SearchInput(query=args.query, focus=args.focus),
        id=f"web-search-workflow-{uuid.uuid4()}",
        task_queue=TASK_QUEUE,
    )


async def main(argv: list[str] | None = None) -> int:
    """Run one pipeline and print the resulting plan."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=LOG_LEVEL)

    try:
        result = await (run_local(args) if args.local else run_temporal(args))
    except PipelineError as exc:
        print(f"\nPipeline failed: {exc}", file=sys.stderr)  # noqa: T201
        return 1
    except WorkflowFailureError as exc:
        print(f"\nWorkflow failed: {exc.cause}", file=sys.stderr)  # noqa: T201
        return 1

    print("\n\nFinal activity plan:\n")  # noqa: T201
    print(result.activities)  # noqa: T201
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
