"""Text-to-quote pipeline up to the mapping handoff.

Pipeline position:
    **Detection** -> **Validation** -> Mapping -> Pricing

Detection is provided by an injected ``ServiceDetector``. Mapping and
pricing consume ``PipelineResult.ready_services`` and live outside this
package.
"""

import logging
import time
from typing import List, Optional, Protocol

from quote_intake.checker.completeness import CompletenessChecker
from quote_intake.config.checker import get_checker_config
from quote_intake.pipeline.clarification import (
    EARLY_RETURN_RESPONSE,
    build_clarification_response,
    early_return_question,
)
from quote_intake.pipeline.context import (
    ClarificationRequest,
    PipelineResult,
    QuoteContext,
)
from quote_intake.pipeline.stages import (
    CompletenessStage,
    DetectionStage,
    PhaseCallback,
    PhaseEndCallback,
    PipelineRunner,
)
from quote_intake.schemas.services import DetectionResult
from quote_intake.schemas.step_result import StepResult

logger = logging.getLogger(__name__)


class ServiceDetector(Protocol):
    """Parses a customer message into candidate services."""

    def detect(self, text: str) -> StepResult[DetectionResult]:
        """Detect services in a message."""


class QuotePipeline:
    """Runs detection and completeness validation for one message at a time."""

    def __init__(
        self,
        detector: ServiceDetector,
        checker: Optional[CompletenessChecker] = None,
        early_return: bool = True,
        on_phase_start: Optional[PhaseCallback] = None,
        on_phase_end: Optional[PhaseEndCallback] = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            detector: Detector implementation (required).
            checker: Completeness checker. Built from the active checker
                config if not provided.
            early_return: Stop with a generic question when nothing was detected.
            on_phase_start: Called with (stage_name, context) before each stage.
            on_phase_end: Called with (stage_name, context, status) after each stage.

        Raises:
            ValueError: If no detector is given.
        """
        if detector is None:
            raise ValueError("Pipeline requires a detector implementation")

        self.detector = detector
        self.checker = checker or CompletenessChecker(get_checker_config())
        self.early_return = early_return
        self.runner = PipelineRunner(
            [DetectionStage(), CompletenessStage()],
            on_phase_start=on_phase_start,
            on_phase_end=on_phase_end,
        )

    def process(self, text: str) -> PipelineResult:
        """Process one customer message.

        Args:
            text: The raw chat message.

        Returns:
            PipelineResult with either ready services, a clarification
            request, or failure warnings.
        """
        context = QuoteContext(
            input_text=text,
            detector=self.detector,
            checker=self.checker,
            early_return=self.early_return,
        )
        context = self.runner.run(context)
        context.timings.total_ms = int((time.time() - context.start_time) * 1000)

        result = self._build_result(context)
        logger.info(
            f"Pipeline finished in {context.timings.total_ms}ms: "
            f"status={context.status}, ready={len(result.ready_services)}"
        )
        return result

    def _build_result(self, context: QuoteContext) -> PipelineResult:
        warnings = self._collect_warnings(context)

        if context.status == "error":
            logger.warning(f"Pipeline failed in {context.current_phase}: {context.error}")
            return PipelineResult(
                success=False,
                steps=context.steps,
                timings=context.timings,
                warnings=warnings,
            )

        if context.status == "skipped" and context.validation is None:
            reason = context.skip_reason or "No services detected"
            return PipelineResult(
                success=False,
                steps=context.steps,
                timings=context.timings,
                clarification_needed=ClarificationRequest(
                    questions=[early_return_question(reason)],
                    incomplete_services=[],
                    suggested_response=EARLY_RETURN_RESPONSE,
                ),
                warnings=warnings,
            )

        validation = context.validation
        if context.status == "skipped":
            return PipelineResult(
                success=False,
                steps=context.steps,
                timings=context.timings,
                clarification_needed=ClarificationRequest(
                    questions=list(validation.clarification_questions),
                    incomplete_services=list(validation.incomplete_services),
                    suggested_response=build_clarification_response(validation),
                ),
                warnings=warnings,
            )

        return PipelineResult(
            success=True,
            steps=context.steps,
            timings=context.timings,
            ready_services=list(validation.complete_services),
            warnings=warnings,
        )

    @staticmethod
    def _collect_warnings(context: QuoteContext) -> List[str]:
        warnings: List[str] = []
        for step in context.steps:
            if step.debug.warnings:
                warnings.extend(step.debug.warnings)
            if not step.success and step.error and step.error not in warnings:
                warnings.append(step.error)
        return warnings
