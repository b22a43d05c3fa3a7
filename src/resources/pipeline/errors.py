"""Error taxonomy shared by steps, pipelines and their Temporal hosting.

Every error carries the id of the step that failed (when known) so callers
can tell which step and which contract broke a run.
"""

from __future__ import annotations

from collections.abc import Sequence


class PipelineError(Exception):
    """Base class for all errors raised while building or running a pipeline."""

    def __init__(self, message: str, *, step_id: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.step_id = step_id

    def __str__(self) -> str:
        if self.step_id:
            return f"[{self.step_id}] {self.message}"
        return self.message


class ValidationError(PipelineError):
    """A payload does not match the shape a step declares."""

    def __init__(
        self,
        message: str,
        *,
        step_id: str | None = None,
        fields: Sequence[str] = (),
        boundary: str | None = None,
    ) -> None:
        super().__init__(message, step_id=step_id)
        self.fields = list(fields)
        """Dotted paths of the mismatching fields."""

        self.boundary = boundary
        """Which side of the step failed: ``input``, ``output`` or ``commit``."""


class IncompatibleShapeError(ValidationError):
    """Adjacent steps of a pipeline cannot be chained."""


class MissingInputError(PipelineError):
    """A step was invoked without its input payload."""


class NotFoundError(PipelineError):
    """An external lookup returned no usable result."""


class ExternalServiceError(PipelineError):
    """An external provider was unreachable or answered with an unexpected shape."""


class StepFailedError(PipelineError):
    """A step raised an exception outside of the taxonomy above."""


class PipelineStateError(PipelineError):
    """A pipeline was used in a state that does not allow the operation."""


ERROR_TYPES: dict[str, type[PipelineError]] = {
    cls.__name__: cls
    for cls in (
        PipelineError,
        ValidationError,
        IncompatibleShapeError,
        MissingInputError,
        NotFoundError,
        ExternalServiceError,
        StepFailedError,
        PipelineStateError,
    )
}
"""Lookup used to rebuild errors that crossed a serialization boundary."""


__all__ = [
    "ERROR_TYPES",
    "ExternalServiceError",
    "IncompatibleShapeError",
    "MissingInputError",
    "NotFoundError",
    "PipelineError",
    "PipelineStateError",
    "StepFailedError",
    "ValidationError",
]
