"""Unit tests for coaching log entities."""

import re

import pytest

from coaching_log.domain.entities import (
    DEFAULT_REFERENCE_DATA,
    CoachingSession,
    ConflictError,
    NotFoundError,
    ReferenceCategory,
    ReferenceData,
    StateDocument,
    StorageError,
    ValidationError,
    utc_timestamp,
)


class TestReferenceCategory:
    """Tests for ReferenceCategory enum."""

    def test_category_values(self):
        """Test that categories use the wire-format keys."""
        assert ReferenceCategory.COACHES.value == "coaches"
        assert ReferenceCategory.COACHEES.value == "coachees"
        assert ReferenceCategory.SESSION_TYPES.value == "sessionTypes"
        assert ReferenceCategory.FOCUS_AREAS.value == "focusAreas"
        assert ReferenceCategory.STATUSES.value == "statuses"

    def test_category_count(self):
        """Test that there are exactly 5 categories."""
        assert len(ReferenceCategory) == 5

    def test_session_fields(self):
        """Test the session field each category maps to."""
        assert ReferenceCategory.COACHES.session_field == "coach"
        assert ReferenceCategory.COACHEES.session_field == "coachee"
        assert ReferenceCategory.SESSION_TYPES.session_field == "session_type"
        assert ReferenceCategory.FOCUS_AREAS.session_field == "focus_area"
        assert ReferenceCategory.STATUSES.session_field == "status"

    def test_parse_known_category(self):
        assert ReferenceCategory.parse("focusAreas") is ReferenceCategory.FOCUS_AREAS
        assert ReferenceCategory.parse(ReferenceCategory.COACHES) is ReferenceCategory.COACHES

    def test_parse_unknown_category(self):
        """Test that unknown keys raise NotFoundError."""
        with pytest.raises(NotFoundError, match="Unknown reference category"):
            ReferenceCategory.parse("mentors")


class TestReferenceData:
    """Tests for ReferenceData entity."""

    def test_defaults(self):
        """Test that a fresh instance carries the built-in lists."""
        data = ReferenceData()

        assert data.coaches == ["Alex Morgan", "Priya Patel", "Jonas Eriksen"]
        assert data.statuses == ["Scheduled", "Completed", "Rescheduled", "Cancelled"]
        for category in ReferenceCategory:
            assert data.values(category) == list(DEFAULT_REFERENCE_DATA[category])

    def test_defaults_are_not_shared(self):
        """Test that instances do not share default lists."""
        first = ReferenceData()
        second = ReferenceData()
        first.coaches.append("Jamie Fox")

        assert "Jamie Fox" not in second.coaches
        assert "Jamie Fox" not in DEFAULT_REFERENCE_DATA[ReferenceCategory.COACHES]

    def test_values_returns_live_list(self):
        data = ReferenceData()
        data.values(ReferenceCategory.FOCUS_AREAS).append("Delegation")

        assert data.focus_areas[-1] == "Delegation"

    def test_camel_case_serialization(self):
        """Test that keys are serialized in the wire format and order."""
        dumped = ReferenceData().model_dump(by_alias=True)

        assert list(dumped) == ["coaches", "coachees", "sessionTypes", "focusAreas", "statuses"]

    def test_from_categories_fills_missing(self):
        data = ReferenceData.from_categories({ReferenceCategory.COACHES: ["Only Coach"]})

        assert data.coaches == ["Only Coach"]
        assert data.coachees == list(DEFAULT_REFERENCE_DATA[ReferenceCategory.COACHEES])


class TestCoachingSession:
    """Tests for CoachingSession entity."""

    def test_session_creation_minimal(self):
        """Test creating a session with minimal required fields."""
        session = CoachingSession(date="2026-01-13", coach="Alex Morgan", coachee="Mina Chen")

        assert session.id
        assert session.session_type == ""
        assert session.duration is None
        assert session.follow_up == ""
        assert session.created_at.endswith("Z")

    def test_session_accepts_wire_names(self):
        """Test that camelCase keys populate the fields."""
        session = CoachingSession.model_validate({
            "date": "2026-01-13",
            "coach": "Alex Morgan",
            "coachee": "Mina Chen",
            "sessionType": "Career Planning",
            "focusArea": "Strategy",
            "followUp": "2026-02-01",
            "createdAt": "2026-01-13T10:00:00.000Z",
        })

        assert session.session_type == "Career Planning"
        assert session.focus_area == "Strategy"
        assert session.follow_up == "2026-02-01"
        assert session.created_at == "2026-01-13T10:00:00.000Z"

    def test_to_json_dict_shape(self):
        """Test that serialization matches the persisted document shape."""
        session = CoachingSession(
            id="s-1",
            date="2026-01-13",
            coach="Alex Morgan",
            coachee="Mina Chen",
            duration=45,
            created_at="2026-01-13T10:00:00.000Z",
        )

        data = session.to_json_dict()
        assert list(data) == [
            "id", "date", "coach", "coachee", "sessionType", "focusArea", "status",
            "duration", "followUp", "highlights", "actions", "createdAt",
        ]
        assert data["duration"] == 45
        assert isinstance(data["duration"], int)

    def test_missing_coachee_rejected(self):
        """Test that coachee is required."""
        with pytest.raises(Exception):  # Pydantic validation error
            CoachingSession(date="2026-01-13", coach="Alex Morgan")

    def test_value_for(self):
        session = CoachingSession(
            date="2026-01-13", coach="Alex Morgan", coachee="Mina Chen", status="Completed"
        )

        assert session.value_for(ReferenceCategory.COACHES) == "Alex Morgan"
        assert session.value_for(ReferenceCategory.STATUSES) == "Completed"


class TestStateDocument:
    """Tests for StateDocument entity."""

    def test_default_document(self):
        document = StateDocument()

        assert document.sessions == []
        assert document.reference_data == ReferenceData()

    def test_to_json_dict_keys(self):
        data = StateDocument().to_json_dict()

        assert list(data) == ["referenceData", "sessions"]
        assert set(data["referenceData"]) == {c.value for c in ReferenceCategory}


def test_utc_timestamp_format():
    """Test that timestamps look like JavaScript's toISOString output."""
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_timestamp())


def test_error_status_codes():
    assert ValidationError("x").status_code == 400
    assert NotFoundError("x").status_code == 404
    assert ConflictError("x").status_code == 409
    assert StorageError("x").status_code == 500
    assert ConflictError("That entry already exists.").message == "That entry already exists."
