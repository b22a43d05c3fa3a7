"""Linear pipelines of typed steps.

A pipeline is built with :meth:`Pipeline.then`, frozen with
:meth:`Pipeline.commit` (which checks that adjacent steps fit together) and
executed any number of times with :meth:`Pipeline.run`. Every value that
crosses a step boundary is validated against the shape the step declares.

Step execution is delegated to an executor so the same pipeline can run
in-process or with each step dispatched elsewhere (for example as a Temporal
activity, see :mod:`src.resources.pipeline.temporal`).
"""

from __future__ import annotations

import logging
import types
import typing
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, Union

import pydantic
from pydantic import BaseModel

from src.resources.pipeline.errors import (
    IncompatibleShapeError,
    MissingInputError,
    PipelineError,
    PipelineStateError,
    StepFailedError,
    ValidationError,
)
from src.resources.pipeline.step import Step, error_fields


_logger = logging.getLogger(__name__)

StepExecutor = Callable[[Step, BaseModel], Awaitable[Any]]
"""Runs one step for the runner and returns its raw result."""


async def execute_locally(step: Step, payload: BaseModel) -> Any:
    """Default executor: run the step in the current process."""
    return await step(payload)


class PipelineState(str, Enum):
    CREATED = "created"
    COMMITTED = "committed"


# ---------------------------------------------------------------------------
# Shape checks
# ---------------------------------------------------------------------------


def _union_args(annotation: Any) -> tuple[Any, ...] | None:
    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return typing.get_args(annotation)
    return None


def _is_model(annotation: Any) -> bool:
    return (
        typing.get_origin(annotation) is None
        and isinstance(annotation, type)
        and issubclass(annotation, BaseModel)
    )


def _annotation_fits(source: Any, target: Any) -> bool:
    """Whether a value annotated ``source`` is always acceptable as ``target``."""
    if target is Any or source == target:
        return True
    source_arms = _union_args(source)
    if source_arms is not None:
        return all(_annotation_fits(arm, target) for arm in source_arms)
    target_arms = _union_args(target)
    if target_arms is not None:
        return any(_annotation_fits(source, arm) for arm in target_arms)
    if _is_model(source) and _is_model(target):
        return not shape_mismatches(source, target)
    return False


def shape_mismatches(producer: type[BaseModel], consumer: type[BaseModel]) -> list[str]:
    """List the reasons ``producer`` values cannot satisfy ``consumer``.

    Every required consumer field must exist on the producer with a
    compatible annotation. Optional consumer fields may be absent; extra
    producer fields are ignored.
    """
    problems: list[str] = []
    for name, field in consumer.model_fields.items():
        source = producer.model_fields.get(name)
        if source is None:
            if field.is_required():
                problems.append(f"{name}: missing from {producer.__name__}")
            continue
        if not _annotation_fits(source.annotation, field.annotation):
            problems.append(
                f"{name}: {_type_name(source.annotation)} does not satisfy "
                f"{_type_name(field.annotation)}"
            )
    return problems


def _type_name(annotation: Any) -> str:
    return getattr(annotation, "__name__", None) or repr(annotation)


def validate_payload(
    model: type[BaseModel],
    value: Any,
    *,
    step_id: str | None,
    boundary: str,
) -> BaseModel:
    """Coerce ``value`` into ``model`` or raise the taxonomy error."""
    if value is None:
        raise MissingInputError(f"{boundary} data not found", step_id=step_id)
    if isinstance(value, model):
        return value
    if isinstance(value, BaseModel):
        value = value.model_dump()
    try:
        return model.model_validate(value)
    except pydantic.ValidationError as exc:
        fields = error_fields(exc)
        raise ValidationError(
            f"{boundary} does not match {model.__name__} (fields: {', '.join(fields)})",
            step_id=step_id,
            fields=fields,
            boundary=boundary,
        ) from exc


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class Pipeline:
    """Ordered, shape-checked sequence of steps."""

    def __init__(
        self,
        id: str,  # noqa: A002
        *,
        input_model: type[BaseModel],
        output_model: type[BaseModel],
        description: str = "",
    ) -> None:
        self.id = id
        self.description = description
        self.input_model = input_model
        self.output_model = output_model
        self._steps: list[Step] = []
        self._state = PipelineState.CREATED

    def __repr__(self) -> str:
        chain = " -> ".join(s.id for s in self._steps) or "<empty>"
        return f"Pipeline({self.id!r}, {self._state.value}, {chain})"

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def steps(self) -> tuple[Step, ...]:
        return tuple(self._steps)

    def get_step(self, step_id: str) -> Step:
        for candidate in self._steps:
            if candidate.id == step_id:
                return candidate
        raise KeyError(step_id)

    def then(self, step: Step) -> Pipeline:
        """Append ``step``; only allowed before the pipeline is committed."""
        if self._state is PipelineState.COMMITTED:
            raise PipelineStateError(f"pipeline {self.id!r} is committed and cannot change")
        self._steps.append(step)
        return self

    def commit(self) -> Pipeline:
        """Freeze the step sequence after checking every boundary fits."""
        if self._state is PipelineState.COMMITTED:
            return self
        if not self._steps:
            raise PipelineStateError(f"pipeline {self.id!r} has no steps")

        boundaries: list[tuple[str, type[BaseModel], type[BaseModel], str]] = [
            (f"{self.id} input", self.input_model, self._steps[0].input_model, self._steps[0].id)
        ]
        for current, following in zip(self._steps, self._steps[1:]):
            boundaries.append(
                (current.id, current.output_model, following.input_model, following.id)
            )
        last = self._steps[-1]
        boundaries.append((last.id, last.output_model, self.output_model, f"{self.id} output"))

        for producer_name, producer, consumer, consumer_name in boundaries:
            problems = shape_mismatches(producer, consumer)
            if problems:
                raise IncompatibleShapeError(
                    f"{producer_name} cannot feed {consumer_name}: {'; '.join(problems)}",
                    step_id=consumer_name,
                    fields=[p.split(":", 1)[0] for p in problems],
                    boundary="commit",
                )

        self._state = PipelineState.COMMITTED
        _logger.debug("Committed %r", self)
        return self

    async def run(
        self,
        payload: Any,
        *,
        executor: StepExecutor | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> BaseModel:
        """Run every step in order and return the final output.

        The first failure aborts the run: later steps never execute and the
        caller only receives the error.
        """
        if self._state is not PipelineState.COMMITTED:
            raise PipelineStateError(f"pipeline {self.id!r} must be committed before it can run")

        log = logger or _logger
        execute = executor or execute_locally
        current: Any = payload

        log.info("Pipeline %s: running %d step(s)", self.id, len(self._steps))
        for step in self._steps:
            try:
                step_input = validate_payload(
                    step.input_model, current, step_id=step.id, boundary="input"
                )
                log.info("Pipeline %s: step %s started", self.id, step.id)
                try:
                    result = await execute(step, step_input)
                except PipelineError as exc:
                    if exc.step_id is None:
                        exc.step_id = step.id
                    raise
                except Exception as exc:
                    raise StepFailedError(
                        f"{type(exc).__name__}: {exc}", step_id=step.id
                    ) from exc
                current = validate_payload(
                    step.output_model, result, step_id=step.id, boundary="output"
                )
            except PipelineError as exc:
                log.warning("Pipeline %s: failed at step %s: %s", self.id, step.id, exc)
                raise

        log.info("Pipeline %s: succeeded", self.id)
        return validate_payload(
            self.output_model, current, step_id=self._steps[-1].id, boundary="output"
        )


__all__ = [
    "Pipeline",
    "PipelineState",
    "StepExecutor",
    "execute_locally",
    "shape_mismatches",
    "validate_payload",
]
