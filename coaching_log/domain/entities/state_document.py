"""Aggregate root holding the whole coaching log."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .coaching_session import CoachingSession
from .reference_data import ReferenceData


class StateDocument(BaseModel):
    """Reference vocabulary plus every recorded session.

    A default-constructed document is the seed state of a fresh store: the
    built-in reference lists and no sessions. Sessions are stored newest
    created first.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    reference_data: ReferenceData = Field(default_factory=ReferenceData)
    sessions: List[CoachingSession] = Field(default_factory=list)

    def to_json_dict(self) -> dict:
        """Serialize to the persisted/wire JSON shape."""
        return self.model_dump(mode="json", by_alias=True)
