"""Optional business-rule checks for validated services.

Not part of the completeness decision: ``CompletenessChecker.check`` never
calls these. Callers that want quantity sanity warnings run them explicitly
on the services they are about to price.
"""

from typing import List

from quote_intake.schemas.services import ValidatedService

PATIO_MIN_SQFT = 50
IRRIGATION_MIN_ZONES = 1
LARGE_QUANTITY_LIMIT = 10000


def validate_business_rules(service: ValidatedService) -> List[str]:
    """Return human-readable rule violations for a service.

    A missing quantity counts as zero.
    """
    violations: List[str] = []
    name = service.name.lower()
    quantity = service.quantity or 0

    # Minimum quantity rules
    if "patio" in name and quantity < PATIO_MIN_SQFT:
        violations.append("Patio installations typically have a 50 sq ft minimum")

    if "irrigation" in name and quantity < IRRIGATION_MIN_ZONES:
        violations.append("Irrigation systems require at least 1 zone")

    # Maximum quantity warnings
    if quantity > LARGE_QUANTITY_LIMIT:
        violations.append("Large quantities may require special pricing - please confirm")

    return violations
