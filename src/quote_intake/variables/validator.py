"""Validation of pricing-variables configuration blobs.

Checks that a stored ``variables_config`` JSON object has the structure the
admin editor relies on, reporting blocking errors and advisory warnings,
and converts valid blobs into the typed ``VariablesConfig`` model.

Required structure::

    {
      "<category>": {
        "label": "...",                 # required
        "description": "...",           # recommended
        "<variable>": {
          "type": "number|select|slider|toggle",   # required
          "label": "...",                          # required
          "default": ...,                          # required
          "adminEditable": true,                   # optional, boolean
          ...                                      # type-specific fields
        }
      }
    }
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from pydantic import ValidationError

from quote_intake.variables.schemas import (
    CATEGORY_RESERVED_KEYS,
    VARIABLE_TYPES,
    VariablesConfig,
)

logger = logging.getLogger(__name__)


class VariablesConfigError(ValueError):
    """Raised when a variables configuration cannot be converted."""

    def __init__(self, message: str, errors: List[str]):
        super().__init__(message)
        self.errors = errors


@dataclass
class VariablesValidation:
    """Outcome of validating a variables configuration."""

    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_range_variable(
    path: str, variable: Dict[str, Any], errors: List[str], warnings: List[str]
) -> None:
    var_type = variable["type"]

    for bound in ("min", "max"):
        if bound not in variable:
            errors.append(f"Variable '{path}' of type '{var_type}' missing required '{bound}' field")
        elif not _is_number(variable[bound]):
            errors.append(f"Variable '{path}' has non-numeric '{bound}' value")

    has_range = _is_number(variable.get("min")) and _is_number(variable.get("max"))
    if has_range and variable["min"] >= variable["max"]:
        errors.append(
            f"Variable '{path}' has min ({variable['min']}) >= max ({variable['max']})"
        )

    if "default" in variable:
        default = variable["default"]
        if not _is_number(default):
            errors.append(f"Variable '{path}' has non-numeric 'default' value")
        elif has_range and (default < variable["min"] or default > variable["max"]):
            errors.append(
                f"Variable '{path}' default value ({default}) is outside range "
                f"[{variable['min']}, {variable['max']}]"
            )

    step = variable.get("step")
    if step is not None and not _is_number(step):
        errors.append(f"Variable '{path}' has non-numeric 'step' value")

    unit = variable.get("unit")
    if unit is not None and not isinstance(unit, str):
        errors.append(f"Variable '{path}' has non-string 'unit' value")
    elif not unit:
        warnings.append(
            f"Variable '{path}' missing optional 'unit' field (recommended for user clarity)"
        )


def _validate_select_variable(path: str, variable: Dict[str, Any], errors: List[str]) -> None:
    options = variable.get("options")
    if not isinstance(options, dict):
        errors.append(f"Variable '{path}' of type 'select' missing required 'options' field")
        return

    if not options:
        errors.append(f"Variable '{path}' has empty 'options' object")

    for option_key, option in options.items():
        option_path = f"{path}.options.{option_key}"
        if not isinstance(option, dict):
            errors.append(f"Option '{option_path}' must be a valid object")
            continue
        if not isinstance(option.get("label"), str) or not option.get("label"):
            errors.append(f"Option '{option_path}' missing required 'label' field")
        if "value" not in option:
            errors.append(f"Option '{option_path}' missing required 'value' field")

    default = variable.get("default")
    if "default" in variable and (not isinstance(default, str) or default not in options):
        errors.append(
            f"Variable '{path}' default value '{variable['default']}' is not a valid option key. "
            f"Valid options: [{', '.join(options.keys())}]"
        )


def _validate_variable(
    path: str, variable: Any, errors: List[str], warnings: List[str]
) -> None:
    if not isinstance(variable, dict):
        errors.append(f"Variable '{path}' must be a valid object")
        return

    var_type = variable.get("type")
    if not var_type:
        errors.append(f"Variable '{path}' missing required 'type' field")
    elif var_type not in VARIABLE_TYPES:
        errors.append(
            f"Variable '{path}' has invalid type '{var_type}'. "
            f"Must be 'number', 'select', 'slider', or 'toggle'"
        )

    if not isinstance(variable.get("label"), str) or not variable.get("label"):
        errors.append(f"Variable '{path}' missing required 'label' field")

    if "default" not in variable:
        errors.append(f"Variable '{path}' missing required 'default' field")

    description = variable.get("description")
    if description is not None and not isinstance(description, str):
        errors.append(f"Variable '{path}' has non-string 'description' value")
    elif not description:
        warnings.append(
            f"Variable '{path}' missing optional 'description' field (recommended for user clarity)"
        )

    if var_type in ("number", "slider"):
        _validate_range_variable(path, variable, errors, warnings)
    elif var_type == "select":
        _validate_select_variable(path, variable, errors)
    elif var_type == "toggle":
        if "default" in variable and not isinstance(variable["default"], bool):
            errors.append(f"Variable '{path}' of type 'toggle' must have a boolean 'default'")

    if "adminEditable" in variable and not isinstance(variable["adminEditable"], bool):
        errors.append(f"Variable '{path}' has invalid 'adminEditable' value. Must be boolean.")


def validate_variables_config(config: Any) -> VariablesValidation:
    """Validate a variables configuration blob.

    Args:
        config: Decoded JSON value of the stored configuration.

    Returns:
        VariablesValidation with errors (blocking) and warnings (advisory).
    """
    errors: List[str] = []
    warnings: List[str] = []

    if not isinstance(config, dict):
        errors.append("variables_config must be a valid object")
        return VariablesValidation(valid=False, errors=errors, warnings=warnings)

    if not config:
        errors.append("variables_config must have at least one category")
        return VariablesValidation(valid=False, errors=errors, warnings=warnings)

    for category_key, category in config.items():
        if not isinstance(category, dict):
            errors.append(f"Category '{category_key}' must be a valid object")
            continue

        if not isinstance(category.get("label"), str) or not category.get("label"):
            errors.append(f"Category '{category_key}' missing required 'label' field")

        description = category.get("description")
        if description is not None and not isinstance(description, str):
            errors.append(f"Category '{category_key}' has non-string 'description' value")
        elif not description:
            warnings.append(f"Category '{category_key}' missing optional 'description' field")

        variables = {k: v for k, v in category.items() if k not in CATEGORY_RESERVED_KEYS}
        if not variables:
            warnings.append(f"Category '{category_key}' has no variables defined")

        for variable_key, variable in variables.items():
            _validate_variable(f"{category_key}.{variable_key}", variable, errors, warnings)

    return VariablesValidation(valid=not errors, errors=errors, warnings=warnings)


def parse_variables_config(config: Any) -> VariablesConfig:
    """Validate a configuration blob and convert it to the typed model.

    Args:
        config: Decoded JSON value of the stored configuration.

    Returns:
        VariablesConfig with one tagged-union member per variable.

    Raises:
        VariablesConfigError: If validation reports errors or the typed
            model rejects the configuration.
    """
    validation = validate_variables_config(config)
    if not validation.valid:
        raise VariablesConfigError(
            f"Invalid variables_config: {len(validation.errors)} error(s)",
            validation.errors,
        )

    for warning in validation.warnings:
        logger.debug(warning)

    categories = {}
    for category_key, category in config.items():
        categories[category_key] = {
            "label": category["label"],
            "description": category.get("description"),
            "variables": {
                k: v for k, v in category.items() if k not in CATEGORY_RESERVED_KEYS
            },
        }
    try:
        return VariablesConfig.model_validate({"categories": categories})
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
        raise VariablesConfigError(
            f"Invalid variables_config: {len(errors)} error(s)", errors
        ) from e


def format_validation_result(result: VariablesValidation) -> str:
    """Pretty-print a validation outcome."""
    lines: List[str] = ["✓ Validation passed" if result.valid else "✗ Validation failed"]

    if result.errors:
        lines.append("\nErrors:")
        lines.extend(f"  • {error}" for error in result.errors)

    if result.warnings:
        lines.append("\nWarnings:")
        lines.extend(f"  ! {warning}" for warning in result.warnings)

    return "\n".join(lines)
