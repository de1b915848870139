"""Typed model of a service's pricing-variables configuration.

The stored configuration is a loosely-typed JSON blob::

    {
      "excavation": {
        "label": "Excavation",
        "description": "Digging and base prep",
        "depth": {"type": "number", "label": "Depth", "default": 6,
                  "min": 1, "max": 24, "unit": "in"}
      }
    }

Once validated it is converted into these models, where each variable is
one member of a tagged union discriminated on ``type``.
"""

from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

VARIABLE_TYPES = ("number", "select", "slider", "toggle")
CATEGORY_RESERVED_KEYS = ("label", "description")


class VariableBase(BaseModel):
    """Fields shared by every variable type."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    label: str
    description: Optional[str] = None
    admin_editable: bool = Field(default=True, alias="adminEditable")


class RangeVariable(VariableBase):
    """Numeric variable bounded by ``min`` and ``max``."""

    default: float
    min: float
    max: float
    step: Optional[float] = None
    unit: Optional[str] = None


class NumberVariable(RangeVariable):
    type: Literal["number"] = "number"


class SliderVariable(RangeVariable):
    type: Literal["slider"] = "slider"


class SelectOption(BaseModel):
    """One choice of a select variable; extra keys (e.g. multipliers) are kept."""

    model_config = ConfigDict(extra="allow")

    label: str
    value: Any


class SelectVariable(VariableBase):
    type: Literal["select"] = "select"
    default: str  # Key into options
    options: Dict[str, SelectOption]

    @property
    def default_option(self) -> SelectOption:
        return self.options[self.default]


class ToggleVariable(VariableBase):
    type: Literal["toggle"] = "toggle"
    default: bool


Variable = Annotated[
    Union[NumberVariable, SliderVariable, SelectVariable, ToggleVariable],
    Field(discriminator="type"),
]


class VariableCategory(BaseModel):
    """A labeled group of variables."""

    label: str
    description: Optional[str] = None
    variables: Dict[str, Variable] = Field(default_factory=dict)


class VariablesConfig(BaseModel):
    """Validated, typed variables configuration."""

    categories: Dict[str, VariableCategory] = Field(default_factory=dict)

    def get_variable(self, path: str) -> Optional[Variable]:
        """Look up a variable by ``category.variable`` path."""
        category_key, _, variable_key = path.partition(".")
        category = self.categories.get(category_key)
        if category is None:
            return None
        return category.variables.get(variable_key)

    def defaults(self) -> Dict[str, Any]:
        """Default value of every variable keyed by ``category.variable``."""
        return {
            f"{category_key}.{variable_key}": variable.default
            for category_key, category in self.categories.items()
            for variable_key, variable in category.variables.items()
        }
