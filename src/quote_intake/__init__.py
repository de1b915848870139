"""
Quote Intake - completeness checking for conversational price quotes.

This package validates the services detected in a customer's chat message,
decides whether pricing can proceed, and generates the clarification
questions to send back when information is missing.
"""

__version__ = "0.1.0"

from quote_intake.checker import CheckerConfig, CompletenessChecker
from quote_intake.pipeline import QuotePipeline
from quote_intake.schemas import (
    DetectionResult,
    RawService,
    StepResult,
    ValidatedService,
    ValidationResult,
)

__all__ = [
    "CheckerConfig",
    "CompletenessChecker",
    "DetectionResult",
    "QuotePipeline",
    "RawService",
    "StepResult",
    "ValidatedService",
    "ValidationResult",
]
