"""Completeness checker - step 2 of the text-to-quote pipeline.

Takes the detector output for one customer message, decides for each
detected service whether it carries enough information to be priced, and
aggregates a go/no-go decision for mapping. When information is missing
the result carries natural-language clarification questions for the chat.

Checks per service, in order:
1. Service name present
2. Quantity above the minimum
3. Unit present (only asked when a unit can be suggested)
4. Detector confidence above the threshold
5. Special requirements from the rule table (irrigation, walls, patios)

The checker is pure: it performs no I/O beyond logging and keeps no state
between calls, so one instance can serve concurrent sessions.
"""

import logging
import time
from typing import Any, List, Mapping, Optional, Tuple, Union

from quote_intake.checker.rules import CheckerConfig
from quote_intake.schemas.services import (
    DetectionResult,
    InputAnalysis,
    RawService,
    ValidatedService,
    ValidationResult,
)
from quote_intake.schemas.step_result import StepDebug, StepResult

logger = logging.getLogger(__name__)

STEP_NAME = "validation"


class CompletenessChecker:
    """Validates detected services and decides whether to ask for clarification."""

    def __init__(self, config: Optional[CheckerConfig] = None):
        """Initialize the checker.

        Args:
            config: Thresholds and rule tables. Uses defaults if not provided.
        """
        self.config = config or CheckerConfig.default()

    def check(
        self, detected: Union[DetectionResult, Mapping[str, Any]]
    ) -> StepResult[ValidationResult]:
        """Validate all detected services of one message.

        Never raises: any fault (including a malformed input shape) is
        reported through ``success=False`` with a safe, empty result that
        still requests clarification.

        Args:
            detected: Detector output, as a model or in its wire (camelCase) shape.

        Returns:
            StepResult wrapping the ValidationResult.
        """
        start = time.time()

        try:
            if not isinstance(detected, DetectionResult):
                detected = DetectionResult.model_validate(detected)

            validated = self.validate_services(detected.services)
            result = self.assess_completeness(validated, detected.input_analysis)

            total = len(detected.services)
            logger.info(
                f"Validated {total} services: {len(result.complete_services)} complete, "
                f"{len(result.incomplete_services)} incomplete, "
                f"clarification={'yes' if result.needs_clarification else 'no'}"
            )

            return StepResult[ValidationResult](
                success=True,
                data=result,
                debug=StepDebug(
                    step=STEP_NAME,
                    processing_time=self._elapsed_ms(start),
                    intermediate_output={
                        "totalServices": total,
                        "completeServices": len(result.complete_services),
                        "incompleteServices": len(result.incomplete_services),
                        "needsClarification": result.needs_clarification,
                        "questionsGenerated": len(result.clarification_questions),
                    },
                    info=[
                        f"Validated {total} services",
                        f"{len(result.complete_services)} complete, "
                        f"{len(result.incomplete_services)} incomplete",
                        f"Clarification needed: {'Yes' if result.needs_clarification else 'No'}",
                    ],
                ),
            )

        except Exception as e:
            logger.warning(f"Validation failed: {e}", exc_info=True)
            return StepResult[ValidationResult](
                success=False,
                data=ValidationResult.empty(),
                debug=StepDebug(
                    step=STEP_NAME,
                    processing_time=self._elapsed_ms(start),
                    intermediate_output=None,
                    warnings=[f"Validation failed: {e}"],
                ),
                error=str(e),
            )

    def validate_services(self, services: List[RawService]) -> List[ValidatedService]:
        return [self.validate_single_service(service) for service in services]

    def validate_single_service(self, service: RawService) -> ValidatedService:
        """Validate a single service for completeness.

        A service can accrue several gaps; each gap adds one missing_info
        entry and one or more questions.
        """
        missing_info: List[str] = []
        questions: List[str] = []
        threshold = self.config.completeness_threshold

        if not service.name or not service.name.strip():
            missing_info.append("Service name")
            questions.append("What type of landscaping service do you need?")

        if service.quantity is None or service.quantity <= self.config.min_quantity:
            missing_info.append("Quantity")
            questions.append(f"How much {service.name or 'of this service'} do you need?")

        if not service.unit or not service.unit.strip():
            suggested_unit = self.suggest_unit(service.name)
            if suggested_unit:
                missing_info.append("Unit")
                questions.append(
                    f"What unit should we use for {service.name}? (e.g., {suggested_unit})"
                )

        if service.confidence < threshold:
            missing_info.append("Service clarity")
            questions.append(f'Did you mean "{service.name}" for your request?')

        special_missing, special_questions = self.check_special_requirements(service)
        missing_info.extend(special_missing)
        questions.extend(special_questions)

        # Confidence gates completeness on its own as well
        is_complete = not missing_info and service.confidence >= threshold

        if not is_complete:
            logger.debug(f"Service '{service.name}' incomplete: missing {missing_info}")

        return ValidatedService.from_raw(
            service,
            is_complete=is_complete,
            missing_info=missing_info,
            questions=questions,
        )

    def check_special_requirements(self, service: RawService) -> Tuple[List[str], List[str]]:
        """Evaluate the special-requirement table for a service.

        Returns:
            Tuple of (missing_info entries, questions).
        """
        missing: List[str] = []
        questions: List[str] = []

        for requirement in self.config.special_requirements:
            if requirement.applies_to(service) and not requirement.is_satisfied(service):
                missing.append(requirement.label)
                questions.extend(requirement.questions)

        return missing, questions

    def suggest_unit(self, service_name: str) -> str:
        """Return the suggested unit for a service name, or "" if none applies."""
        for rule in self.config.unit_rules:
            if rule.matches(service_name or ""):
                return rule.unit
        return ""

    def assess_completeness(
        self,
        validated_services: List[ValidatedService],
        input_analysis: InputAnalysis,
    ) -> ValidationResult:
        """Partition services and decide the next pipeline step."""
        complete = [s for s in validated_services if s.is_complete]
        incomplete = [s for s in validated_services if not s.is_complete]

        # First seen wins, in service order then question order
        clarification_questions = list(
            dict.fromkeys(q for service in incomplete for q in service.questions)
        )

        needs_clarification = self.should_request_clarification(
            complete, incomplete, input_analysis
        )

        return ValidationResult(
            complete_services=complete,
            incomplete_services=incomplete,
            clarification_questions=clarification_questions,
            needs_clarification=needs_clarification,
            ready_for_mapping=bool(complete) and not needs_clarification,
        )

    def should_request_clarification(
        self,
        complete: List[ValidatedService],
        incomplete: List[ValidatedService],
        input_analysis: InputAnalysis,
    ) -> bool:
        if not complete:
            return True

        # Strict majority; a tie proceeds
        if len(incomplete) > len(complete):
            return True

        if input_analysis.overall_confidence < self.config.completeness_threshold:
            return True

        return any(self.is_special_service(s.name) for s in incomplete)

    def is_special_service(self, service_name: str) -> bool:
        """Check whether an incomplete service of this name blocks pricing."""
        name = service_name.lower()
        return any(k.lower() in name for k in self.config.blocking_service_keywords)

    def get_completeness_summary(self, result: ValidationResult) -> str:
        """Render a one-sentence summary of a validation result."""
        total = result.total_services
        complete = len(result.complete_services)

        if total == 0:
            return "No services were identified from your request."

        if complete == total:
            return f"All {total} services have complete information and are ready for pricing."

        if complete == 0:
            return f"Found {total} services but all need additional information."

        return (
            f"{complete} of {total} services are complete. "
            f"{len(result.incomplete_services)} need additional details."
        )

    @staticmethod
    def _elapsed_ms(start: float) -> int:
        return int((time.time() - start) * 1000)

