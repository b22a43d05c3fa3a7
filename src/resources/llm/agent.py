"""Text-generation agents backed by the OpenAI Responses API.

An agent is configuration (model, fixed instructions, optional web search
and reasoning knobs) plus two ways of calling it: ``stream`` yields text
fragments as the provider produces them, ``generate`` returns the complete
text in one call.

Requires ``OPENAI_API_KEY`` to be configured in the environment. The client
is created on first use so agents can be declared at import time.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any, Protocol

import openai
from openai import AsyncOpenAI
from pydantic import BaseModel, Field

from src.resources.pipeline.errors import ExternalServiceError


class AgentConfig(BaseModel):
    """Static description of an agent role."""

    name: str
    """Display name, used in logs and error messages."""

    model: str
    """Model identifier sent to the provider."""

    instructions: str
    """System prompt applied to every call."""

    web_search_max_uses: int | None = Field(
        default=None,
        gt=0,
        description="Cap on web search invocations per call; None disables web search.",
    )
    reasoning_effort: str | None = Field(
        default=None,
        description="Reasoning effort for reasoning models (e.g. 'low', 'medium', 'high').",
    )
    max_output_tokens: int | None = Field(
        default=None,
        gt=0,
        description="Upper bound on reasoning plus visible output tokens.",
    )


class TextGenerator(Protocol):
    """What pipeline steps need from an agent."""

    def stream(self, prompt: str) -> AsyncIterator[str]: ...

    async def generate(self, prompt: str) -> str: ...


def _incomplete_reason(response: Any) -> str:
    details = getattr(response, "incomplete_details", None)
    return str(getattr(details, "reason", None) or "unknown reason")


class TextAgent:
    """Runs an :class:`AgentConfig` against the Responses API."""

    def __init__(self, config: AgentConfig, client: AsyncOpenAI | None = None) -> None:
        self.config = config
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            try:
                self._client = AsyncOpenAI()
            except openai.OpenAIError as exc:
                raise ExternalServiceError(f"{self.config.name}: {exc}") from exc
        return self._client

    def request_options(self, prompt: str) -> dict[str, Any]:
        """Keyword arguments for ``responses.create`` (minus ``stream``)."""
        options: dict[str, Any] = {
            "model": self.config.model,
            "instructions": self.config.instructions.strip(),
            "input": [{"role": "user", "content": prompt}],
        }
        if self.config.web_search_max_uses is not None:
            options["tools"] = [{"type": "web_search"}]
            options["max_tool_calls"] = self.config.web_search_max_uses
        if self.config.reasoning_effort is not None:
            options["reasoning"] = {"effort": self.config.reasoning_effort}
        if self.config.max_output_tokens is not None:
            options["max_output_tokens"] = self.config.max_output_tokens
        return options

    async def stream(self, prompt: str) -> AsyncIterator[str]:
        """Yield output text deltas in the order the provider sends them."""
        try:
            events = await self.client.responses.create(
                **self.request_options(prompt), stream=True
            )
            async for event in events:
                kind = getattr(event, "type", None)
                if kind == "response.output_text.delta":
                    if event.delta:
                        yield event.delta
                elif kind == "error":
                    raise ExternalServiceError(
                        f"{self.config.name}: stream error: {getattr(event, 'message', event)}"
                    )
                elif kind == "response.failed":
                    error = getattr(event.response, "error", None)
                    raise ExternalServiceError(
                        f"{self.config.name}: generation failed: {getattr(error, 'message', error)}"
                    )
                elif kind == "response.incomplete":
                    raise ExternalServiceError(
                        f"{self.config.name}: generation incomplete: "
                        f"{_incomplete_reason(event.response)}"
                    )
        except openai.APIError as exc:
            raise ExternalServiceError(f"{self.config.name}: {exc}") from exc

    async def generate(self, prompt: str) -> str:
        """Return the complete response text from a single non-streaming call."""
        try:
            response = await self.client.responses.create(**self.request_options(prompt))
        except openai.APIError as exc:
            raise ExternalServiceError(f"{self.config.name}: {exc}") from exc
        status = getattr(response, "status", None)
        if status == "failed":
            error = getattr(response, "error", None)
            raise ExternalServiceError(
                f"{self.config.name}: generation failed: {getattr(error, 'message', error)}"
            )
        if status == "incomplete":
            raise ExternalServiceError(
                f"{self.config.name}: generation incomplete: {_incomplete_reason(response)}"
            )
        text = getattr(response, "output_text", None)
        if not isinstance(text, str):
            raise ExternalServiceError(f"{self.config.name}: response carried no text output")
        return text


__all__ = ["AgentConfig", "TextAgent", "TextGenerator"]
