"""Shared fixtures for pipeline and workflow tests."""

from collections.abc import AsyncGenerator, AsyncIterator

import pytest
import pytest_asyncio
from temporalio.client import Client
from temporalio.contrib.pydantic import pydantic_data_converter
from temporalio.testing import WorkflowEnvironment


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def env() -> AsyncGenerator[WorkflowEnvironment, None]:
    """Create a Temporal test workflow environment."""
    env = await WorkflowEnvironment.start_time_skipping(
        data_converter=pydantic_data_converter,
    )
    yield env
    await env.shutdown()


@pytest_asyncio.fixture(loop_scope="session")
async def client(env: WorkflowEnvironment) -> Client:
    """Create a Temporal test client."""
    return env.client


class FakeAgent:
    """Scripted stand-in for ``TextAgent`` that records every prompt."""

    def __init__(self, fragments: list[str] | None = None, text: str = "findings") -> None:
        self.fragments = fragments if fragments is not None else ["Plan", " for ", "today"]
        self.text = text
        self.stream_prompts: list[str] = []
        self.generate_prompts: list[str] = []

    async def stream(self, prompt: str) -> AsyncIterator[str]:
        self.stream_prompts.append(prompt)
        for fragment in self.fragments:
            yield fragment

    async def generate(self, prompt: str) -> str:
        self.generate_prompts.append(prompt)
        return self.text


@pytest.fixture
def fake_agent() -> FakeAgent:
    return FakeAgent()


GEOCODING_PARIS = {
    "results": [{"latitude": 48.85341, "longitude": 2.3488, "name": "Paris", "country": "France"}]
}

FORECAST_PAYLOAD = {
    "current": {"time": "2025-06-01T12:00", "precipitation": 0.0, "weathercode": 61},
    "hourly": {
        "temperature_2m": [14.2, 18.9, 22.5, 16.0],
        "precipitation_probability": [10, 90, 30, 0],
    },
}


@pytest.fixture
def open_meteo(monkeypatch: pytest.MonkeyPatch) -> dict:
    """Patch the Open-Meteo HTTP helper; edit the returned dict to change answers."""
    from src.workflows.activity_planner import weather as mod

    responses: dict = {
        "geocoding": (200, GEOCODING_PARIS),
        "forecast": (200, FORECAST_PAYLOAD),
        "calls": [],
    }

    async def fake_get_json(url: str, params: dict, timeout: float):  # noqa: ARG001
        responses["calls"].append((url, params))
        key = "geocoding" if "geocoding" in url else "forecast"
        answer = responses[key]
        if isinstance(answer, BaseException):
            raise answer
        return answer

    monkeypatch.setattr(mod, "_get_json", fake_get_json)
    return responses
