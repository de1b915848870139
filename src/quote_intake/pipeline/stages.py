"""Pipeline stage protocol, runner, and the detection / validation stages."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol

from quote_intake.pipeline.context import QuoteContext
from quote_intake.schemas.services import DetectionResult, InputAnalysis
from quote_intake.schemas.step_result import StepDebug, StepResult

logger = logging.getLogger(__name__)

# Statuses that end a run; "success" moves on to the next stage
STOP_STATUSES = ("skipped", "error")

# (stage_name, context) -> None
PhaseCallback = Callable[[str, QuoteContext], None]

# (stage_name, context, status) -> None
PhaseEndCallback = Callable[[str, QuoteContext, str], None]


class Stage(Protocol):
    """One step of quote processing."""

    name: str

    def run(self, context: QuoteContext) -> QuoteContext:
        """Advance the context; set ``status`` to stop the run."""


class PipelineRunner:
    """Runs the quote stages in order until one skips or fails.

    Phase callbacks are for progress reporting only: a callback that raises
    is logged and the run continues.
    """

    def __init__(
        self,
        stages: List[Stage],
        on_phase_start: Optional[PhaseCallback] = None,
        on_phase_end: Optional[PhaseEndCallback] = None,
    ) -> None:
        self.stages = stages
        self.on_phase_start = on_phase_start
        self.on_phase_end = on_phase_end

    def run(self, context: QuoteContext) -> QuoteContext:
        for stage in self.stages:
            self._notify(self.on_phase_start, stage.name, context)
            context = stage.run(context)
            self._notify(self.on_phase_end, stage.name, context, context.status)

            if context.status in STOP_STATUSES:
                logger.debug(
                    f"Stopping after '{stage.name}': {context.status} "
                    f"({context.skip_reason or context.error})"
                )
                break
        return context

    @staticmethod
    def _notify(callback: Optional[Callable[..., None]], stage_name: str, *args) -> None:
        if callback is None:
            return
        try:
            callback(stage_name, *args)
        except Exception as e:
            logger.warning(f"Phase callback failed for '{stage_name}': {e}", exc_info=True)


def _elapsed_ms(start: float) -> int:
    return int((time.time() - start) * 1000)


def failed_detection(text: str, error: str, processing_time: int = 0) -> StepResult[DetectionResult]:
    """Envelope for a detector that raised instead of reporting failure."""
    return StepResult[DetectionResult](
        success=False,
        data=DetectionResult(
            services=[],
            unmapped_text=[text],
            input_analysis=InputAnalysis(overall_confidence=0.0),
        ),
        debug=StepDebug(
            step="detection",
            processing_time=processing_time,
            intermediate_output=None,
            warnings=[f"detection failed: {error}"],
        ),
        error=error,
    )


@dataclass
class DetectionStage:
    """Runs the injected detector on the raw message."""

    name: str = "detection"

    def run(self, context: QuoteContext) -> QuoteContext:
        context.current_phase = self.name
        start = time.time()

        try:
            result = context.detector.detect(context.input_text)
        except Exception as e:
            logger.error(f"Detection failed for input {context.input_text!r}", exc_info=True)
            result = failed_detection(context.input_text, str(e), _elapsed_ms(start))

        context.timings.detection_ms = _elapsed_ms(start)
        context.steps.append(result)

        if not result.success:
            context.status = "error"
            context.error = result.error or "Detection failed"
            return context

        context.detection = result.data
        services = result.data.services
        logger.debug(f"Detected {len(services)} services")
        for service in services:
            logger.debug(f"  - {service.name}: {service.quantity} {service.unit or 'units'}")

        if context.early_return and not services:
            context.status = "skipped"
            context.skip_reason = "No services detected"

        return context


@dataclass
class CompletenessStage:
    """Validates detected services and stops when clarification is needed."""

    name: str = "validation"

    def run(self, context: QuoteContext) -> QuoteContext:
        context.current_phase = self.name

        result = context.checker.check(context.detection)
        context.timings.validation_ms = result.debug.processing_time
        context.steps.append(result)

        if not result.success:
            context.status = "error"
            context.error = result.error or "Validation failed"
            return context

        context.validation = result.data
        if result.data.needs_clarification:
            logger.info(
                f"Clarification needed: {len(result.data.clarification_questions)} questions"
            )
            context.status = "skipped"
            context.skip_reason = "Clarification needed"

        return context
