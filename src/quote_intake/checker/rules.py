"""Rule tables for the completeness checker.

Service-specific behavior is data, not branches:

- ``UnitRule``: keyword match on the service name -> suggested unit
- ``SpecialRequirement``: keyword match on the service name -> detail check
  and the clarification questions to ask when details are missing

Matching is case-insensitive substring search on the service name. Rules
are evaluated in table order; for unit suggestions the first match wins,
special requirements are all evaluated.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from quote_intake.schemas.services import RawService

COMPLETENESS_THRESHOLD = 0.8
MIN_QUANTITY = 0.1

# Incomplete services whose name contains one of these always block pricing.
# Independent of the special-requirement table; "lighting" only appears here.
DEFAULT_BLOCKING_SERVICE_KEYWORDS = ["irrigation", "lighting", "retaining wall"]


@dataclass
class UnitRule:
    """Suggested unit for services whose name matches the keywords."""

    unit: str
    any_of: List[str]  # Matches if any keyword is in the name
    all_of: List[str] = field(default_factory=list)  # Every keyword must be in the name

    def matches(self, service_name: str) -> bool:
        name = service_name.lower()
        if self.all_of:
            return all(k.lower() in name for k in self.all_of)
        return any(k.lower() in name for k in self.any_of)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UnitRule":
        return cls(
            unit=data["unit"],
            any_of=data.get("any_of", []),
            all_of=data.get("all_of", []),
        )


@dataclass
class SpecialRequirement:
    """Extra details some services need before they can be priced.

    The rule applies when any of ``service_keywords`` occurs in the service
    name. It is satisfied when the unit is one of ``accepted_units`` (exact
    match) or the original text contains any of ``detail_keywords``.
    """

    label: str  # Entry added to missing_info, e.g. "Irrigation details"
    service_keywords: List[str]
    questions: List[str]
    detail_keywords: List[str] = field(default_factory=list)
    accepted_units: List[str] = field(default_factory=list)

    def applies_to(self, service: RawService) -> bool:
        name = service.name.lower()
        return any(k.lower() in name for k in self.service_keywords)

    def is_satisfied(self, service: RawService) -> bool:
        if self.accepted_units and service.unit in self.accepted_units:
            return True
        text = (service.original_text or "").lower()
        return any(k.lower() in text for k in self.detail_keywords)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SpecialRequirement":
        return cls(
            label=data["label"],
            service_keywords=data["service_keywords"],
            questions=data.get("questions", []),
            detail_keywords=data.get("detail_keywords", []),
            accepted_units=data.get("accepted_units", []),
        )


def default_unit_rules() -> List[UnitRule]:
    """Unit suggestions used when the tenant config does not override them."""
    return [
        UnitRule(unit="square feet", any_of=["mulch", "patio", "sod"]),
        UnitRule(unit="linear feet", any_of=["edging", "wall", "border"]),
        UnitRule(unit="each", any_of=["tree", "shrub", "plant"]),
        UnitRule(unit="zones", any_of=[], all_of=["irrigation", "zone"]),
        UnitRule(unit="cubic yards", any_of=["topsoil", "gravel"]),
    ]


def default_special_requirements() -> List[SpecialRequirement]:
    """Irrigation, retaining wall and patio detail requirements."""
    return [
        SpecialRequirement(
            label="Irrigation details",
            service_keywords=["irrigation", "sprinkler"],
            detail_keywords=["zone", "spout", "turf", "drip"],
            questions=[
                "How many irrigation zones do you need (turf zones vs drip zones)?",
                "Will boring under driveways or sidewalks be required?",
            ],
        ),
        SpecialRequirement(
            label="Wall specifications",
            service_keywords=["retaining", "wall"],
            detail_keywords=["feet", "height", "tall", "linear"],
            questions=[
                "What height retaining wall do you need?",
                "How many linear feet of retaining wall?",
            ],
        ),
        SpecialRequirement(
            label="Patio specifications",
            service_keywords=["patio", "paver"],
            accepted_units=["sqft", "square_feet"],
            questions=["What size patio do you need (in square feet)?"],
        ),
    ]


@dataclass
class CheckerConfig:
    """Configuration for the completeness checker."""

    completeness_threshold: float = COMPLETENESS_THRESHOLD
    min_quantity: float = MIN_QUANTITY
    unit_rules: List[UnitRule] = field(default_factory=default_unit_rules)
    special_requirements: List[SpecialRequirement] = field(
        default_factory=default_special_requirements
    )
    blocking_service_keywords: List[str] = field(
        default_factory=lambda: list(DEFAULT_BLOCKING_SERVICE_KEYWORDS)
    )

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "CheckerConfig":
        """Create config from dictionary (loaded from YAML).

        Sections that are absent keep their defaults; a present but empty
        list disables that table.
        """
        unit_rules: Optional[List[UnitRule]] = None
        if "unit_rules" in config:
            unit_rules = [UnitRule.from_dict(r) for r in config["unit_rules"] or []]

        special: Optional[List[SpecialRequirement]] = None
        if "special_requirements" in config:
            special = [
                SpecialRequirement.from_dict(r) for r in config["special_requirements"] or []
            ]

        blocking = config.get("blocking_service_keywords")

        return cls(
            completeness_threshold=float(
                config.get("completeness_threshold", COMPLETENESS_THRESHOLD)
            ),
            min_quantity=float(config.get("min_quantity", MIN_QUANTITY)),
            unit_rules=unit_rules if unit_rules is not None else default_unit_rules(),
            special_requirements=(
                special if special is not None else default_special_requirements()
            ),
            blocking_service_keywords=(
                list(blocking)
                if blocking is not None
                else list(DEFAULT_BLOCKING_SERVICE_KEYWORDS)
            ),
        )

    @classmethod
    def default(cls) -> "CheckerConfig":
        return cls()
