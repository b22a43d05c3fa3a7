"""Temporal hosting for pipelines.

Inside a workflow, :class:`ActivityStepExecutor` dispatches each step as an
activity named after the step id, so all I/O stays in activities and the
workflow only validates and threads payloads. Pipeline errors cross the
activity/workflow boundary as non-retryable ``ApplicationError``s whose
``type`` is the error class name.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from pydantic import BaseModel
from temporalio import workflow
from temporalio.common import RetryPolicy
from temporalio.exceptions import ActivityError, ApplicationError, TimeoutError

from src.resources.pipeline.errors import (
    ERROR_TYPES,
    ExternalServiceError,
    PipelineError,
    StepFailedError,
    ValidationError,
)
from src.resources.pipeline.step import Step


NO_RETRY = RetryPolicy(maximum_attempts=1)
"""Steps are attempted exactly once."""


def to_application_error(exc: PipelineError) -> ApplicationError:
    """Wrap a pipeline error so Temporal reports it without retrying."""
    details: dict[str, Any] = {"step_id": exc.step_id}
    if isinstance(exc, ValidationError):
        details["fields"] = exc.fields
        details["boundary"] = exc.boundary
    return ApplicationError(
        exc.message,
        details,
        type=type(exc).__name__,
        non_retryable=True,
    )


def from_activity_error(exc: ActivityError, step_id: str) -> PipelineError:
    """Rebuild the pipeline error an activity failed with."""
    cause = exc.cause
    if isinstance(cause, ApplicationError) and cause.type in ERROR_TYPES:
        details = cause.details[0] if cause.details else {}
        if not isinstance(details, dict):
            details = {}
        cls = ERROR_TYPES[cause.type]
        if issubclass(cls, ValidationError):
            return cls(
                cause.message,
                step_id=details.get("step_id") or step_id,
                fields=details.get("fields") or (),
                boundary=details.get("boundary"),
            )
        return cls(cause.message, step_id=details.get("step_id") or step_id)
    if isinstance(cause, TimeoutError):
        return ExternalServiceError(f"activity timed out: {cause}", step_id=step_id)
    return StepFailedError(str(cause or exc), step_id=step_id)


async def run_step_activity(step: Step, payload: BaseModel) -> Any:
    """Body shared by step activities: run the step, translate its errors."""
    try:
        return await step(payload)
    except PipelineError as exc:
        if exc.step_id is None:
            exc.step_id = step.id
        raise to_application_error(exc) from exc


class ActivityStepExecutor:
    """Pipeline executor that runs each step as a Temporal activity.

    Must be used from inside a workflow.
    """

    def __init__(
        self,
        *,
        start_to_close_timeout: timedelta,
        retry_policy: RetryPolicy = NO_RETRY,
        task_queue: str | None = None,
    ) -> None:
        self.start_to_close_timeout = start_to_close_timeout
        self.retry_policy = retry_policy
        self.task_queue = task_queue

    async def __call__(self, step: Step, payload: BaseModel) -> Any:
        try:
            return await workflow.execute_activity(
                step.id,
                payload,
                result_type=step.output_model,
                start_to_close_timeout=self.start_to_close_timeout,
                retry_policy=self.retry_policy,
                task_queue=self.task_queue,
            )
        except ActivityError as exc:
            raise from_activity_error(exc, step.id) from exc


__all__ = [
    "NO_RETRY",
    "ActivityStepExecutor",
    "from_activity_error",
    "run_step_activity",
    "to_application_error",
]
