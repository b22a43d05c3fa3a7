"""Integration tests for the activity planner workflows with mocked activities."""

import uuid
from concurrent.futures import ThreadPoolExecutor

import pytest
from temporalio import activity
from temporalio.client import Client, WorkflowFailureError
from temporalio.exceptions import ApplicationError
from temporalio.worker import Worker

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
from src.workflows.activity_planner.workflow import (
    WeatherActivitiesWorkflow,
    WebSearchActivitiesWorkflow,
)


class TestWeatherActivitiesWorkflow:
    """Test suite for WeatherActivitiesWorkflow."""

    @pytest.fixture
    def task_queue(self) -> str:
        return f"test-weather-activities-{uuid.uuid4()}"

    @pytest.mark.asyncio(loop_scope="session")
    async def test_workflow_plans_from_forecast(self, client: Client, task_queue: str) -> None:
        """Should thread the forecast from the first activity into the second."""
        planned_for: list[str] = []

        @activity.defn(name=FETCH_WEATHER)
        async def fetch_weather_mocked(input: CityInput) -> Forecast:  # noqa: A002
            return Forecast(
                date="2025-06-01T09:30:00+00:00",
                max_temp=22.5,
                min_temp=14.2,
                precipitation_chance=90,
                condition="Slight rain",
                location=input.city,
            )

        @activity.defn(name=PLAN_ACTIVITIES)
        async def plan_activities_mocked(input: Forecast) -> ActivitiesOutput:  # noqa: A002
            planned_for.append(input.location)
            return ActivitiesOutput(activities=f"Museums in {input.location} ({input.condition})")

        async with Worker(
            client,
            task_queue=task_queue,
            workflows=[WeatherActivitiesWorkflow],
            activities=[fetch_weather_mocked, plan_activities_mocked],
            activity_executor=ThreadPoolExecutor(5),
        ):
            result = await client.execute_workflow(
                WeatherActivitiesWorkflow.run,
                CityInput(city="Paris"),
                id=f"test-weather-activities-{uuid.uuid4()}",
                task_queue=task_queue,
            )

        assert isinstance(result, ActivitiesOutput)
        assert result.activities == "Museums in Paris (Slight rain)"
        assert planned_for == ["Paris"]

    @pytest.mark.asyncio(loop_scope="session")
    async def test_unknown_city_fails_without_planning(self, client: Client, task_queue: str) -> None:
        """A not-found location fails the workflow and skips the planning activity."""
        planned_for: list[str] = []

        @activity.defn(name=FETCH_WEATHER)
        async def fetch_weather_mocked(input: CityInput) -> Forecast:  # noqa: A002
            raise ApplicationError(
                f"Location '{input.city}' not found",
                {"step_id": FETCH_WEATHER},
                type="NotFoundError",
                non_retryable=True,
            )

        @activity.defn(name=PLAN_ACTIVITIES)
        async def plan_activities_mocked(input: Forecast) -> ActivitiesOutput:  # noqa: A002
            planned_for.append(input.location)
            return ActivitiesOutput(activities="unreachable")

        async with Worker(
            client,
            task_queue=task_queue,
            workflows=[WeatherActivitiesWorkflow],
            activities=[fetch_weather_mocked, plan_activities_mocked],
            activity_executor=ThreadPoolExecutor(5),
        ):
            with pytest.raises(WorkflowFailureError) as exc_info:
                await client.execute_workflow(
                    WeatherActivitiesWorkflow.run,
                    CityInput(city="Atlantis"),
                    id=f"test-weather-activities-{uuid.uuid4()}",
                    task_queue=task_queue,
                )

        cause = exc_info.value.cause
        assert isinstance(cause, ApplicationError)
        assert cause.type == "NotFoundError"
        assert "Atlantis" in cause.message
        assert planned_for == []


class TestWebSearchActivitiesWorkflow:
    """Test suite for WebSearchActivitiesWorkflow."""

    @pytest.fixture
    def task_queue(self) -> str:
        return f"test-web-search-activities-{uuid.uuid4()}"

    @pytest.mark.asyncio(loop_scope="session")
    async def test_workflow_plans_from_findings(self, client: Client, task_queue: str) -> None:
        @activity.defn(name=WEB_SEARCH_INFO)
        async def web_search_mocked(input: SearchInput) -> SearchResult:  # noqa: A002
            return SearchResult(
                search_results=f"{input.query}: night market on Friday",
                query=input.query,
                focus=input.focus,
            )

        @activity.defn(name=PLAN_WEB_SEARCH_ACTIVITIES)
        async def plan_mocked(input: SearchResult) -> ActivitiesOutput:  # noqa: A002
            return ActivitiesOutput(activities=f"Go to the {input.search_results}")

        async with Worker(
            client,
            task_queue=task_queue,
            workflows=[WebSearchActivitiesWorkflow],
            activities=[web_search_mocked, plan_mocked],
            activity_executor=ThreadPoolExecutor(5),
        ):
            result = await client.execute_workflow(
                WebSearchActivitiesWorkflow.run,
                SearchInput(query="Taipei", focus="food"),
                id=f"test-web-search-activities-{uuid.uuid4()}",
                task_queue=task_queue,
            )

        assert result.activities == "Go to the Taipei: night market on Friday"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
