"""Uniform result envelope returned by every pipeline step."""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class StepDebug(BaseModel):
    """Diagnostics attached to a step result instead of performing I/O."""

    model_config = ConfigDict(populate_by_name=True)

    step: str = Field(..., description="Step name, e.g. 'detection' or 'validation'")
    processing_time: int = Field(
        0, alias="processingTime", description="Wall time spent in the step (ms)"
    )
    intermediate_output: Optional[Dict[str, Any]] = Field(
        default=None, alias="intermediateOutput"
    )
    info: Optional[List[str]] = None
    warnings: Optional[List[str]] = None


class StepResult(BaseModel, Generic[T]):
    """Envelope for a step outcome.

    ``data`` is always structurally valid, even when ``success`` is False,
    so callers check ``success`` rather than catching exceptions.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    data: T
    debug: StepDebug
    error: Optional[str] = None
