"""Reference vocabulary entities for the coaching log."""

from enum import Enum
from typing import Dict, Iterable, List, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .errors import NotFoundError


class ReferenceCategory(str, Enum):
    """The five controlled vocabularies a session is recorded against."""

    COACHES = "coaches"
    COACHEES = "coachees"
    SESSION_TYPES = "sessionTypes"
    FOCUS_AREAS = "focusAreas"
    STATUSES = "statuses"

    @classmethod
    def parse(cls, value: str) -> "ReferenceCategory":
        """Resolve a wire-format category key.

        Raises:
            NotFoundError: If the key is not one of the five categories.
        """
        try:
            return cls(value)
        except ValueError:
            raise NotFoundError("Unknown reference category.") from None

    @property
    def attribute(self) -> str:
        """Attribute name on ReferenceData holding this category."""
        return _ATTRIBUTES[self]

    @property
    def session_field(self) -> str:
        """Attribute name on CoachingSession that references this category."""
        return _SESSION_FIELDS[self]


_ATTRIBUTES: Dict[ReferenceCategory, str] = {
    ReferenceCategory.COACHES: "coaches",
    ReferenceCategory.COACHEES: "coachees",
    ReferenceCategory.SESSION_TYPES: "session_types",
    ReferenceCategory.FOCUS_AREAS: "focus_areas",
    ReferenceCategory.STATUSES: "statuses",
}

_SESSION_FIELDS: Dict[ReferenceCategory, str] = {
    ReferenceCategory.COACHES: "coach",
    ReferenceCategory.COACHEES: "coachee",
    ReferenceCategory.SESSION_TYPES: "session_type",
    ReferenceCategory.FOCUS_AREAS: "focus_area",
    ReferenceCategory.STATUSES: "status",
}

# First entry of each list is the form default in the browser client.
DEFAULT_REFERENCE_DATA: Dict[ReferenceCategory, Tuple[str, ...]] = {
    ReferenceCategory.COACHES: ("Alex Morgan", "Priya Patel", "Jonas Eriksen"),
    ReferenceCategory.COACHEES: ("Jordan Lee", "Mina Chen", "Samuel Ortiz", "Taylor Brooks"),
    ReferenceCategory.SESSION_TYPES: (
        "1:1 Coaching",
        "Career Planning",
        "Onboarding Support",
        "Performance Review",
    ),
    ReferenceCategory.FOCUS_AREAS: ("Leadership", "Communication", "Strategy", "Well-being"),
    ReferenceCategory.STATUSES: ("Scheduled", "Completed", "Rescheduled", "Cancelled"),
}


def default_values(category: ReferenceCategory) -> List[str]:
    """Return a fresh copy of the built-in values for a category."""
    return list(DEFAULT_REFERENCE_DATA[category])


class ReferenceData(BaseModel):
    """Ordered value lists for every reference category.

    All five categories are always present. Insertion order is preserved
    and meaningful; uniqueness is enforced when values are added, not here,
    so legacy files with duplicates still load.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    coaches: List[str] = Field(default_factory=lambda: default_values(ReferenceCategory.COACHES))
    coachees: List[str] = Field(default_factory=lambda: default_values(ReferenceCategory.COACHEES))
    session_types: List[str] = Field(
        default_factory=lambda: default_values(ReferenceCategory.SESSION_TYPES)
    )
    focus_areas: List[str] = Field(
        default_factory=lambda: default_values(ReferenceCategory.FOCUS_AREAS)
    )
    statuses: List[str] = Field(default_factory=lambda: default_values(ReferenceCategory.STATUSES))

    @classmethod
    def from_categories(cls, values: Dict[ReferenceCategory, Iterable[str]]) -> "ReferenceData":
        """Build reference data keyed by category; missing categories get defaults."""
        return cls(**{category.attribute: list(items) for category, items in values.items()})

    def values(self, category: ReferenceCategory) -> List[str]:
        """Return the live list for a category (mutations affect this model)."""
        return getattr(self, category.attribute)
