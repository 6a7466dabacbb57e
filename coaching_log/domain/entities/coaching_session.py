"""Coaching session entity."""

import uuid
from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .reference_data import ReferenceCategory

# Wire names of the fields a new session must carry.
REQUIRED_SESSION_FIELDS = ("date", "coach", "coachee", "sessionType", "focusArea", "status")


def new_session_id() -> str:
    """Generate an opaque session identifier."""
    return str(uuid.uuid4())


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CoachingSession(BaseModel):
    """One recorded coaching conversation.

    The reference-backed fields (coach, coachee, session type, focus area,
    status) are plain strings. They are expected to name a current reference
    value but are not checked against the vocabulary, so history survives
    vocabulary edits.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=new_session_id, min_length=1)
    date: str = Field(min_length=1, description="Calendar date, YYYY-MM-DD")
    coach: str = Field(min_length=1)
    coachee: str = Field(min_length=1)
    session_type: str = ""
    focus_area: str = ""
    status: str = ""
    duration: Optional[Union[int, float]] = Field(default=None, description="Minutes")
    follow_up: str = Field(default="", description="Follow-up date, YYYY-MM-DD")
    highlights: str = ""
    actions: str = ""
    created_at: str = Field(default_factory=utc_timestamp)

    def value_for(self, category: ReferenceCategory) -> str:
        """Return the value this session records for a reference category."""
        return getattr(self, category.session_field)

    def to_json_dict(self) -> dict:
        """Serialize with the camelCase keys used on disk and on the wire."""
        return self.model_dump(mode="json", by_alias=True)
