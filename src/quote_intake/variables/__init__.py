"""Pricing-variables configuration validation and typed model."""

from quote_intake.variables.schemas import (
    NumberVariable,
    SelectOption,
    SelectVariable,
    SliderVariable,
    ToggleVariable,
    VariableCategory,
    VariablesConfig,
)
from quote_intake.variables.validator import (
    VariablesConfigError,
    VariablesValidation,
    format_validation_result,
    parse_variables_config,
    validate_variables_config,
)

__all__ = [
    "NumberVariable",
    "SelectOption",
    "SelectVariable",
    "SliderVariable",
    "ToggleVariable",
    "VariableCategory",
    "VariablesConfig",
    "VariablesConfigError",
    "VariablesValidation",
    "format_validation_result",
    "parse_variables_config",
    "validate_variables_config",
]
