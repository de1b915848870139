"""Pipeline context and result dataclasses."""

import time
from dataclasses import dataclass, field
from typing import Any, List, Optional

from quote_intake.checker.completeness import CompletenessChecker
from quote_intake.schemas.services import DetectionResult, ValidatedService, ValidationResult
from quote_intake.schemas.step_result import StepResult


@dataclass
class PipelineTimings:
    """Per-step timing breakdown in milliseconds."""

    detection_ms: int = 0
    validation_ms: int = 0
    total_ms: int = 0


@dataclass
class QuoteContext:
    """Mutable context passed between pipeline stages for one message."""

    input_text: str
    detector: Any
    checker: CompletenessChecker
    early_return: bool = True
    start_time: float = field(default_factory=time.time)
    timings: PipelineTimings = field(default_factory=PipelineTimings)
    detection: Optional[DetectionResult] = None
    validation: Optional[ValidationResult] = None
    steps: List[StepResult] = field(default_factory=list)
    status: str = "success"  # "success", "skipped", "error"
    error: Optional[str] = None
    skip_reason: Optional[str] = None
    current_phase: str = "setup"


@dataclass
class ClarificationRequest:
    """What to send back to the customer when pricing cannot proceed."""

    questions: List[str]
    incomplete_services: List[ValidatedService]
    suggested_response: str


@dataclass
class PipelineResult:
    """Outcome of processing one customer message.

    ``ready_services`` holds the complete services to hand to mapping when
    ``success`` is True. Otherwise either ``clarification_needed`` is set
    (normal conversational outcome) or a step failed and ``warnings``
    explains why.
    """

    success: bool
    steps: List[StepResult]
    timings: PipelineTimings
    ready_services: List[ValidatedService] = field(default_factory=list)
    clarification_needed: Optional[ClarificationRequest] = None
    warnings: List[str] = field(default_factory=list)
