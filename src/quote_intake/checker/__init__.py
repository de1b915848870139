"""Completeness checking for detected quote line items."""

from quote_intake.checker.business_rules import validate_business_rules
from quote_intake.checker.completeness import CompletenessChecker
from quote_intake.checker.rules import (
    COMPLETENESS_THRESHOLD,
    MIN_QUANTITY,
    CheckerConfig,
    SpecialRequirement,
    UnitRule,
)

__all__ = [
    "COMPLETENESS_THRESHOLD",
    "MIN_QUANTITY",
    "CheckerConfig",
    "CompletenessChecker",
    "SpecialRequirement",
    "UnitRule",
    "validate_business_rules",
]
