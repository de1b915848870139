"""Pydantic schemas shared by the quote intake pipeline."""

from quote_intake.schemas.services import (
    DetectionResult,
    InputAnalysis,
    RawService,
    ValidatedService,
    ValidationResult,
)
from quote_intake.schemas.step_result import StepDebug, StepResult

__all__ = [
    "DetectionResult",
    "InputAnalysis",
    "RawService",
    "StepDebug",
    "StepResult",
    "ValidatedService",
    "ValidationResult",
]
