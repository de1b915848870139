"""Pipeline package - stages, runner, and context dataclasses."""

from quote_intake.pipeline.clarification import build_clarification_response
from quote_intake.pipeline.context import (
    ClarificationRequest,
    PipelineResult,
    PipelineTimings,
    QuoteContext,
)
from quote_intake.pipeline.quote_pipeline import QuotePipeline, ServiceDetector
from quote_intake.pipeline.stages import (
    CompletenessStage,
    DetectionStage,
    PipelineRunner,
    Stage,
)

__all__ = [
    # Context dataclasses
    "ClarificationRequest",
    "PipelineResult",
    "PipelineTimings",
    "QuoteContext",
    # Stage classes
    "CompletenessStage",
    "DetectionStage",
    # Runner
    "PipelineRunner",
    "QuotePipeline",
    "ServiceDetector",
    "Stage",
    "build_clarification_response",
]
