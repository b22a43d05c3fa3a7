"""Tests for step descriptors and the Temporal error translation helpers."""

import pydantic
import pytest
from pydantic import BaseModel
from temporalio.exceptions import ActivityError, ApplicationError, RetryState, TimeoutError, TimeoutType

from src.resources.pipeline.errors import (
    ExternalServiceError,
    MissingInputError,
    NotFoundError,
    StepFailedError,
    ValidationError,
)
from src.resources.pipeline.step import Step, step
from src.resources.pipeline.temporal import (
    from_activity_error,
    run_step_activity,
    to_application_error,
)


class Number(BaseModel):
    value: int


class Positive(BaseModel):
    value: int = pydantic.Field(gt=0)


@step(id="double", input_model=Number, output_model=Number)
async def double(payload: Number) -> Number:
    """Doubles a number.

    Longer explanation that should not end up in the description.
    """
    return Number(value=payload.value * 2)


@step(id="negate", input_model=Number, output_model=Positive)
async def negate(payload: Number) -> Positive:
    return Positive(value=-payload.value)


def activity_error(cause: BaseException) -> ActivityError:
    error = ActivityError(
        "activity failed",
        scheduled_event_id=1,
        started_event_id=2,
        identity="test",
        activity_type="double",
        activity_id="1",
        retry_state=RetryState.NON_RETRYABLE_FAILURE,
    )
    error.__cause__ = cause
    return error


class TestStep:
    def test_decorator_builds_step_from_docstring(self) -> None:
        assert isinstance(double, Step)
        assert double.id == "double"
        assert double.description == "Doubles a number."
        assert double.input_model is Number

    def test_explicit_description_wins(self) -> None:
        @step(id="noop", input_model=Number, output_model=Number, description="Does nothing")
        async def noop(payload: Number) -> Number:
            """Ignored."""
            return payload

        assert noop.description == "Does nothing"

    def test_step_is_immutable(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            double.id = "triple"

    @pytest.mark.asyncio
    async def test_call_runs_execute(self) -> None:
        assert await double(Number(value=21)) == Number(value=42)

    @pytest.mark.asyncio
    async def test_none_input_is_missing_input(self) -> None:
        with pytest.raises(MissingInputError) as exc_info:
            await double(None)
        assert exc_info.value.step_id == "double"

    @pytest.mark.asyncio
    async def test_invalid_constructed_output_is_validation_error(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await negate(Number(value=3))
        assert exc_info.value.boundary == "output"
        assert exc_info.value.fields == ["value"]
        assert "Positive" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_validation_error_names_the_model_that_failed(self) -> None:
        @step(id="via-positive", input_model=Number, output_model=Number)
        async def via_positive(payload: Number) -> Number:
            checked = Positive(value=payload.value)
            return Number(value=checked.value)

        with pytest.raises(ValidationError) as exc_info:
            await via_positive(Number(value=-1))

        assert exc_info.value.message.startswith("step raised a validation error for Positive")
        assert "Number" not in exc_info.value.message.split(":")[0]


class TestTemporalTranslation:
    def test_application_error_carries_type_and_details(self) -> None:
        error = to_application_error(
            ValidationError("bad", step_id="double", fields=["value"], boundary="output")
        )
        assert error.type == "ValidationError"
        assert error.non_retryable is True
        assert error.message == "bad"
        assert error.details[0] == {"step_id": "double", "fields": ["value"], "boundary": "output"}

    def test_round_trip_keeps_error_class(self) -> None:
        cause = to_application_error(NotFoundError("Location 'Atlantis' not found", step_id="fetch-weather"))
        rebuilt = from_activity_error(activity_error(cause), "fallback")
        assert isinstance(rebuilt, NotFoundError)
        assert rebuilt.step_id == "fetch-weather"
        assert rebuilt.message == "Location 'Atlantis' not found"

    def test_timeout_becomes_external_service_error(self) -> None:
        cause = TimeoutError("timed out", type=TimeoutType.START_TO_CLOSE, last_heartbeat_details=[])
        rebuilt = from_activity_error(activity_error(cause), "plan-activities")
        assert isinstance(rebuilt, ExternalServiceError)
        assert rebuilt.step_id == "plan-activities"

    def test_unknown_failure_becomes_step_failed(self) -> None:
        cause = ApplicationError("boom", type="KeyError")
        rebuilt = from_activity_error(activity_error(cause), "double")
        assert isinstance(rebuilt, StepFailedError)
        assert rebuilt.step_id == "double"

    @pytest.mark.asyncio
    async def test_run_step_activity_raises_application_error(self) -> None:
        with pytest.raises(ApplicationError) as exc_info:
            await run_step_activity(negate, Number(value=3))
        assert exc_info.value.type == "ValidationError"
        assert exc_info.value.non_retryable is True
        assert exc_info.value.details[0]["step_id"] == "negate"

    @pytest.mark.asyncio
    async def test_run_step_activity_returns_result(self) -> None:
        assert await run_step_activity(double, Number(value=2)) == Number(value=4)
