"""Pydantic schemas for detected and validated quote line items.

A customer message is turned into a ``DetectionResult`` by the detector,
then checked service by service into a ``ValidationResult``. Field names
are snake_case in Python; the camelCase aliases are the wire format used
by the chat frontend and the detector (``originalText``,
``overallConfidence``, ...).
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RawService(BaseModel):
    """One customer-requested line item as extracted by the detector."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(default="", description="Free-text service name")
    quantity: Optional[float] = Field(
        default=None, description="Requested amount, may be absent or zero"
    )
    unit: Optional[str] = Field(default=None, description="Free-text unit, may be absent")
    confidence: float = Field(
        ..., ge=0.0, le=1.0, description="Detector certainty for this service (0.0-1.0)"
    )
    original_text: Optional[str] = Field(
        default="",
        alias="originalText",
        description="Source span of the message this service was detected in, may be null",
    )


class ValidatedService(RawService):
    """A RawService plus its completeness outcome."""

    is_complete: bool = Field(..., alias="isComplete")
    missing_info: List[str] = Field(
        default_factory=list,
        alias="missingInfo",
        description="Human-readable names of the missing pieces, in check order",
    )
    questions: List[str] = Field(
        default_factory=list,
        description="Clarification questions generated for this service",
    )

    @classmethod
    def from_raw(
        cls,
        service: RawService,
        is_complete: bool,
        missing_info: List[str],
        questions: List[str],
    ) -> "ValidatedService":
        """Build a validated service carrying over every RawService field."""
        return cls(
            **service.model_dump(),
            is_complete=is_complete,
            missing_info=list(missing_info),
            questions=list(questions),
        )


class InputAnalysis(BaseModel):
    """Message-level signals reported by the detector."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    overall_confidence: float = Field(..., alias="overallConfidence")
    has_multiple_services: bool = Field(default=False, alias="hasMultipleServices")
    has_quantities: bool = Field(default=False, alias="hasQuantities")
    has_units: bool = Field(default=False, alias="hasUnits")


class DetectionResult(BaseModel):
    """Detector output for a single user message."""

    model_config = ConfigDict(populate_by_name=True)

    services: List[RawService] = Field(default_factory=list)
    unmapped_text: List[str] = Field(default_factory=list, alias="unmappedText")
    input_analysis: InputAnalysis = Field(..., alias="inputAnalysis")


class ValidationResult(BaseModel):
    """Aggregate completeness decision for one user message."""

    model_config = ConfigDict(populate_by_name=True)

    complete_services: List[ValidatedService] = Field(
        default_factory=list, alias="completeServices"
    )
    incomplete_services: List[ValidatedService] = Field(
        default_factory=list, alias="incompleteServices"
    )
    clarification_questions: List[str] = Field(
        default_factory=list,
        alias="clarificationQuestions",
        description="Deduplicated questions of all incomplete services, first seen first",
    )
    needs_clarification: bool = Field(..., alias="needsClarification")
    ready_for_mapping: bool = Field(..., alias="readyForMapping")

    @property
    def total_services(self) -> int:
        return len(self.complete_services) + len(self.incomplete_services)

    @classmethod
    def empty(cls) -> "ValidationResult":
        """Safe result returned when validation itself fails."""
        return cls(
            complete_services=[],
            incomplete_services=[],
            clarification_questions=[],
            needs_clarification=True,
            ready_for_mapping=False,
        )
