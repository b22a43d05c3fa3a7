"""Step descriptors: one typed, asynchronous unit of a pipeline."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict

from src.resources.pipeline.errors import MissingInputError, ValidationError


StepFn = Callable[[Any], Awaitable[Any]]


def error_fields(exc: pydantic.ValidationError) -> list[str]:
    """Return the dotted locations of every error in a pydantic failure."""
    return [".".join(str(part) for part in err["loc"]) or "<root>" for err in exc.errors()]


class Step(BaseModel):
    """Immutable description of a pipeline step.

    A step owns no state between invocations; everything it needs arrives
    through its input payload or was bound when the step was built.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str
    """Unique identifier, also used as the Temporal activity name."""

    description: str = ""
    """Human-readable summary of what the step does."""

    input_model: type[BaseModel]
    """Shape the step accepts."""

    output_model: type[BaseModel]
    """Shape the step promises to return."""

    execute: StepFn
    """Asynchronous transformation from input to output."""

    async def __call__(self, payload: Any) -> Any:
        if payload is None:
            raise MissingInputError("input data not found", step_id=self.id)
        try:
            return await self.execute(payload)
        except pydantic.ValidationError as exc:
            # Raised while the step built its own result.
            raise ValidationError(
                f"step raised a validation error for {exc.title}: {exc}",
                step_id=self.id,
                fields=error_fields(exc),
                boundary="output",
            ) from exc


def step(
    *,
    id: str,  # noqa: A002
    input_model: type[BaseModel],
    output_model: type[BaseModel],
    description: str | None = None,
) -> Callable[[StepFn], Step]:
    """Decorator that turns an async function into a :class:`Step`.

    The description defaults to the first line of the function docstring.
    """

    def decorator(fn: StepFn) -> Step:
        doc = (fn.__doc__ or "").strip().splitlines()
        return Step(
            id=id,
            description=description if description is not None else (doc[0] if doc else ""),
            input_model=input_model,
            output_model=output_model,
            execute=fn,
        )

    return decorator


__all__ = ["Step", "StepFn", "error_fields", "step"]
