"""Chat replies for messages that cannot be priced yet."""

from typing import Optional

from quote_intake.schemas.services import ValidationResult

EARLY_RETURN_RESPONSE = "Could you please provide more details about your landscaping needs?"


def _format_quantity(quantity: Optional[float]) -> str:
    if quantity is None:
        return ""
    return f"{quantity:g}"


def build_clarification_response(validation: ValidationResult) -> str:
    """Build the message asking the customer for the missing details.

    Lists the clarification questions, then recaps the services that are
    already understood so the customer only answers what is missing.
    """
    response = "I need a few more details to provide accurate pricing:\n\n"

    for index, question in enumerate(validation.clarification_questions, start=1):
        response += f"{index}. {question}\n"

    if validation.complete_services:
        response += "\nSo far I understand you need:\n"
        for service in validation.complete_services:
            line = f"• {service.name}: {_format_quantity(service.quantity)} {service.unit or ''}"
            response += line.rstrip() + "\n"

    return response


def early_return_question(reason: str) -> str:
    return f"I need more information: {reason}"
