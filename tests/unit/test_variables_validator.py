"""Tests for pricing-variables configuration validation."""

import copy

import pytest
from pydantic import ValidationError

from quote_intake.variables import validator as validator_module
from quote_intake.variables import (
    NumberVariable,
    SelectVariable,
    SliderVariable,
    ToggleVariable,
    VariablesConfigError,
    VariablesValidation,
    format_validation_result,
    parse_variables_config,
    validate_variables_config,
)

VALID_CONFIG = {
    "excavation": {
        "label": "Excavation",
        "description": "Digging and base preparation",
        "depth": {
            "type": "number",
            "label": "Depth",
            "description": "Excavation depth",
            "default": 6,
            "min": 1,
            "max": 24,
            "unit": "in",
        },
        "soil": {
            "type": "select",
            "label": "Soil type",
            "description": "Dominant soil on site",
            "default": "clay",
            "options": {
                "clay": {"label": "Clay", "value": "clay", "multiplier": 1.2},
                "sand": {"label": "Sand", "value": "sand", "multiplier": 1.0},
            },
        },
    },
    "materials": {
        "label": "Materials",
        "description": "Material handling",
        "waste": {
            "type": "slider",
            "label": "Waste factor",
            "description": "Extra material ordered",
            "default": 10,
            "min": 0,
            "max": 30,
            "step": 5,
            "unit": "%",
        },
        "delivery": {
            "type": "toggle",
            "label": "Delivery",
            "description": "Include delivery charge",
            "default": True,
            "adminEditable": False,
        },
    },
}


@pytest.fixture
def config():
    """A mutable copy of a valid configuration."""
    return copy.deepcopy(VALID_CONFIG)


class TestValidateStructure:
    """Top-level and category checks."""

    def test_valid_config(self, config):
        """A complete configuration has no errors or warnings."""
        result = validate_variables_config(config)

        assert result.valid is True
        assert result.errors == []
        assert result.warnings == []

    @pytest.mark.parametrize("value", [None, [], "config", 3])
    def test_not_an_object(self, value):
        """Non-object configurations are rejected outright."""
        result = validate_variables_config(value)

        assert result.valid is False
        assert result.errors == ["variables_config must be a valid object"]

    def test_no_categories(self):
        """An empty object needs at least one category."""
        result = validate_variables_config({})
        assert result.errors == ["variables_config must have at least one category"]

    def test_category_not_object(self, config):
        """Categories must be objects."""
        config["extras"] = 5
        result = validate_variables_config(config)
        assert result.errors == ["Category 'extras' must be a valid object"]

    def test_category_missing_label(self, config):
        """Category labels are required."""
        del config["excavation"]["label"]
        result = validate_variables_config(config)
        assert result.errors == ["Category 'excavation' missing required 'label' field"]

    def test_category_warnings(self, config):
        """Missing descriptions and empty categories only warn."""
        config["extras"] = {"label": "Extras"}
        result = validate_variables_config(config)

        assert result.valid is True
        assert result.warnings == [
            "Category 'extras' missing optional 'description' field",
            "Category 'extras' has no variables defined",
        ]


class TestValidateVariables:
    """Per-variable checks."""

    def test_variable_not_object(self, config):
        """Variables must be objects."""
        config["excavation"]["depth"] = 6
        result = validate_variables_config(config)
        assert result.errors == ["Variable 'excavation.depth' must be a valid object"]

    def test_missing_type(self, config):
        """The type field is required."""
        del config["excavation"]["depth"]["type"]
        result = validate_variables_config(config)
        assert result.errors == ["Variable 'excavation.depth' missing required 'type' field"]

    def test_invalid_type(self, config):
        """Only known variable types are accepted."""
        config["excavation"]["depth"]["type"] = "text"
        result = validate_variables_config(config)
        assert result.errors == [
            "Variable 'excavation.depth' has invalid type 'text'. "
            "Must be 'number', 'select', 'slider', or 'toggle'"
        ]

    def test_missing_label_and_default(self, config):
        """Label and default are required for every type."""
        del config["materials"]["delivery"]["label"]
        del config["materials"]["delivery"]["default"]
        result = validate_variables_config(config)
        assert result.errors == [
            "Variable 'materials.delivery' missing required 'label' field",
            "Variable 'materials.delivery' missing required 'default' field",
        ]

    def test_missing_description_warns(self, config):
        """A missing variable description is advisory."""
        del config["excavation"]["depth"]["description"]
        result = validate_variables_config(config)

        assert result.valid is True
        assert result.warnings == [
            "Variable 'excavation.depth' missing optional 'description' field "
            "(recommended for user clarity)"
        ]

    def test_admin_editable_must_be_boolean(self, config):
        """adminEditable must be a boolean when present."""
        config["materials"]["delivery"]["adminEditable"] = "no"
        result = validate_variables_config(config)
        assert result.errors == [
            "Variable 'materials.delivery' has invalid 'adminEditable' value. Must be boolean."
        ]

    def test_errors_are_accumulated(self, config):
        """Every problem is reported, not only the first."""
        config["excavation"]["depth"]["type"] = "text"
        config["materials"]["delivery"]["default"] = "yes"
        del config["materials"]["label"]

        result = validate_variables_config(config)

        assert result.valid is False
        assert len(result.errors) == 3


class TestRangeVariables:
    """Checks for number and slider variables."""

    @pytest.mark.parametrize("bound", ["min", "max"])
    def test_missing_bound(self, config, bound):
        """Both bounds are required."""
        del config["excavation"]["depth"][bound]
        result = validate_variables_config(config)
        assert result.errors == [
            f"Variable 'excavation.depth' of type 'number' missing required '{bound}' field"
        ]

    def test_slider_missing_bound(self, config):
        """Sliders need bounds too."""
        del config["materials"]["waste"]["max"]
        result = validate_variables_config(config)
        assert result.errors == [
            "Variable 'materials.waste' of type 'slider' missing required 'max' field"
        ]

    def test_min_not_below_max(self, config):
        """min must be strictly below max."""
        config["excavation"]["depth"].update({"min": 24, "max": 24, "default": 24})
        result = validate_variables_config(config)
        assert result.errors == ["Variable 'excavation.depth' has min (24) >= max (24)"]

    def test_default_outside_range(self, config):
        """The default must lie within the bounds."""
        config["excavation"]["depth"]["default"] = 30
        result = validate_variables_config(config)
        assert result.errors == [
            "Variable 'excavation.depth' default value (30) is outside range [1, 24]"
        ]

    def test_default_on_bounds(self, config):
        """Bounds themselves are valid defaults."""
        config["excavation"]["depth"]["default"] = 24
        assert validate_variables_config(config).valid is True

    def test_non_numeric_values(self, config):
        """Bounds and default must be numbers."""
        config["excavation"]["depth"].update({"min": "1", "default": True})
        result = validate_variables_config(config)
        assert result.errors == [
            "Variable 'excavation.depth' has non-numeric 'min' value",
            "Variable 'excavation.depth' has non-numeric 'default' value",
        ]

    def test_missing_unit_warns(self, config):
        """A missing unit is advisory."""
        del config["materials"]["waste"]["unit"]
        result = validate_variables_config(config)

        assert result.valid is True
        assert result.warnings == [
            "Variable 'materials.waste' missing optional 'unit' field "
            "(recommended for user clarity)"
        ]


class TestSelectVariables:
    """Checks for select variables."""

    def test_missing_options(self, config):
        """Select variables need options."""
        del config["excavation"]["soil"]["options"]
        result = validate_variables_config(config)
        assert result.errors == [
            "Variable 'excavation.soil' of type 'select' missing required 'options' field"
        ]

    def test_empty_options(self, config):
        """Empty options are an error and leave no valid default."""
        config["excavation"]["soil"]["options"] = {}
        result = validate_variables_config(config)
        assert result.errors == [
            "Variable 'excavation.soil' has empty 'options' object",
            "Variable 'excavation.soil' default value 'clay' is not a valid option key. "
            "Valid options: []",
        ]

    def test_option_fields(self, config):
        """Options need a label and a value."""
        config["excavation"]["soil"]["options"]["loam"] = {}
        config["excavation"]["soil"]["options"]["rock"] = "rock"
        result = validate_variables_config(config)
        assert result.errors == [
            "Option 'excavation.soil.options.loam' missing required 'label' field",
            "Option 'excavation.soil.options.loam' missing required 'value' field",
            "Option 'excavation.soil.options.rock' must be a valid object",
        ]

    def test_default_not_an_option(self, config):
        """The default must be one of the option keys."""
        config["excavation"]["soil"]["default"] = "loam"
        result = validate_variables_config(config)
        assert result.errors == [
            "Variable 'excavation.soil' default value 'loam' is not a valid option key. "
            "Valid options: [clay, sand]"
        ]

    def test_unhashable_default(self, config):
        """A non-string default is reported, not raised."""
        config["excavation"]["soil"]["default"] = ["clay"]
        result = validate_variables_config(config)
        assert result.valid is False
        assert "is not a valid option key" in result.errors[0]


class TestToggleVariables:
    """Checks for toggle variables."""

    def test_default_must_be_boolean(self, config):
        """Toggle defaults must be booleans."""
        config["materials"]["delivery"]["default"] = 1
        result = validate_variables_config(config)
        assert result.errors == [
            "Variable 'materials.delivery' of type 'toggle' must have a boolean 'default'"
        ]


class TestParseVariablesConfig:
    """Conversion into the typed model."""

    def test_typed_variables(self, config):
        """Each variable becomes the model for its type."""
        parsed = parse_variables_config(config)

        depth = parsed.get_variable("excavation.depth")
        assert isinstance(depth, NumberVariable)
        assert (depth.min, depth.max, depth.unit) == (1, 24, "in")

        soil = parsed.get_variable("excavation.soil")
        assert isinstance(soil, SelectVariable)
        assert soil.default_option.label == "Clay"

        assert isinstance(parsed.get_variable("materials.waste"), SliderVariable)

        delivery = parsed.get_variable("materials.delivery")
        assert isinstance(delivery, ToggleVariable)
        assert delivery.admin_editable is False

    def test_category_metadata(self, config):
        """Category labels and descriptions are kept apart from variables."""
        category = parse_variables_config(config).categories["excavation"]

        assert category.label == "Excavation"
        assert category.description == "Digging and base preparation"
        assert list(category.variables) == ["depth", "soil"]

    def test_defaults(self, config):
        """Defaults are keyed by category.variable path."""
        assert parse_variables_config(config).defaults() == {
            "excavation.depth": 6,
            "excavation.soil": "clay",
            "materials.waste": 10,
            "materials.delivery": True,
        }

    @pytest.mark.parametrize("path", ["missing.depth", "excavation.missing", "excavation"])
    def test_unknown_path(self, config, path):
        """Unknown paths return None."""
        assert parse_variables_config(config).get_variable(path) is None

    def test_invalid_config_raises(self, config):
        """Invalid configurations raise with every error attached."""
        config["excavation"]["depth"]["default"] = 30

        with pytest.raises(VariablesConfigError) as exc_info:
            parse_variables_config(config)

        assert str(exc_info.value) == "Invalid variables_config: 1 error(s)"
        assert exc_info.value.errors == [
            "Variable 'excavation.depth' default value (30) is outside range [1, 24]"
        ]
        assert isinstance(exc_info.value, ValueError)

    @pytest.mark.parametrize(
        "field,value,message",
        [
            ("unit", 5, "Variable 'excavation.depth' has non-string 'unit' value"),
            ("description", 7, "Variable 'excavation.depth' has non-string 'description' value"),
            ("step", "fine", "Variable 'excavation.depth' has non-numeric 'step' value"),
        ],
    )
    def test_mistyped_optional_fields(self, config, field, value, message):
        """Mistyped optional fields are validation errors, not model errors."""
        config["excavation"]["depth"][field] = value

        assert validate_variables_config(config).errors == [message]
        with pytest.raises(VariablesConfigError) as exc_info:
            parse_variables_config(config)
        assert exc_info.value.errors == [message]

    def test_mistyped_category_description(self, config):
        """A non-string category description is an error."""
        config["materials"]["description"] = ["Material handling"]

        with pytest.raises(VariablesConfigError) as exc_info:
            parse_variables_config(config)

        assert exc_info.value.errors == [
            "Category 'materials' has non-string 'description' value"
        ]

    def test_model_rejection_raises_config_error(self, config, monkeypatch):
        """Anything the typed model rejects surfaces as VariablesConfigError."""
        config["excavation"]["depth"]["min"] = "one"
        monkeypatch.setattr(
            validator_module,
            "validate_variables_config",
            lambda _config: VariablesValidation(valid=True),
        )

        with pytest.raises(VariablesConfigError) as exc_info:
            parse_variables_config(config)

        assert str(exc_info.value) == "Invalid variables_config: 1 error(s)"
        assert exc_info.value.errors[0].startswith(
            "categories.excavation.variables.depth.number.min: "
        )
        assert isinstance(exc_info.value.__cause__, ValidationError)


class TestFormatValidationResult:
    """Human-readable validation output."""

    def test_passed(self):
        """A clean pass is a single line."""
        assert format_validation_result(VariablesValidation(valid=True)) == "✓ Validation passed"

    def test_failed_with_errors_and_warnings(self):
        """Errors and warnings are listed under their headings."""
        result = VariablesValidation(valid=False, errors=["bad min"], warnings=["no unit"])

        assert format_validation_result(result) == (
            "✗ Validation failed\n\nErrors:\n  • bad min\n\nWarnings:\n  ! no unit"
        )
