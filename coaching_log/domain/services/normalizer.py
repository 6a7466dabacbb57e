"""Normalization of untrusted input into canonical domain entities.

Everything here is a pure function of its input: no I/O, no store access.
The same rules apply to documents read from disk and to payloads submitted
by clients, so that ``normalize_state(normalize_state(x).to_json_dict())``
always equals ``normalize_state(x)``.
"""

import math
from collections.abc import Mapping
from typing import Any, Callable, Optional, Union

from ..entities.coaching_session import CoachingSession, new_session_id, utc_timestamp
from ..entities.reference_data import ReferenceCategory, ReferenceData, default_values
from ..entities.state_document import StateDocument

Number = Union[int, float]


def clean_text(value: Any) -> str:
    """Trim a string; anything that is not a string becomes ``""``."""
    return value.strip() if isinstance(value, str) else ""


def parse_duration(value: Any) -> Optional[Number]:
    """Parse a session duration in minutes.

    Accepts a finite number >= 0, or a string holding one. Anything else
    (negative, NaN, infinite, blank, wrong type) means "no duration" rather
    than an error. Integral values come back as ``int``.
    """
    # bool is an int subclass but never a duration
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number: Number = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    try:
        if not math.isfinite(number) or number < 0:
            return None
    except OverflowError:
        return None

    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def normalize_reference_data(raw: Any) -> ReferenceData:
    """Shape raw reference data into all five category lists.

    A category holding a list keeps its trimmed, non-empty string entries in
    order (duplicates included). A missing or non-list category falls back
    to its built-in defaults.
    """
    source = raw if isinstance(raw, Mapping) else {}
    values = {}
    for category in ReferenceCategory:
        items = source.get(category.value)
        if isinstance(items, list):
            values[category] = [text for text in (clean_text(item) for item in items) if text]
        else:
            values[category] = default_values(category)
    return ReferenceData.from_categories(values)


def normalize_session(
    raw: Any,
    id_factory: Callable[[], str] = new_session_id,
    clock: Callable[[], str] = utc_timestamp,
) -> Optional[CoachingSession]:
    """Shape a raw session record, or return None if it cannot be stored.

    A record needs a date, a coach and a coachee to be kept. A blank id or
    creation timestamp is replaced with a fresh one; non-blank ones are kept
    verbatim.
    """
    if not isinstance(raw, Mapping):
        return None

    date = clean_text(raw.get("date"))
    coach = clean_text(raw.get("coach"))
    coachee = clean_text(raw.get("coachee"))
    if not date or not coach or not coachee:
        return None

    session_id = raw.get("id")
    if not isinstance(session_id, str) or not session_id.strip():
        session_id = id_factory()

    created_at = raw.get("createdAt")
    if not isinstance(created_at, str) or not created_at.strip():
        created_at = clock()

    return CoachingSession(
        id=session_id,
        date=date,
        coach=coach,
        coachee=coachee,
        session_type=clean_text(raw.get("sessionType")),
        focus_area=clean_text(raw.get("focusArea")),
        status=clean_text(raw.get("status")),
        duration=parse_duration(raw.get("duration")),
        follow_up=clean_text(raw.get("followUp")),
        highlights=clean_text(raw.get("highlights")),
        actions=clean_text(raw.get("actions")),
        created_at=created_at,
    )


def normalize_state(raw: Any) -> StateDocument:
    """Turn any decoded JSON value into a valid state document."""
    source = raw if isinstance(raw, Mapping) else {}

    raw_sessions = source.get("sessions")
    sessions = []
    if isinstance(raw_sessions, list):
        for item in raw_sessions:
            session = normalize_session(item)
            if session is not None:
                sessions.append(session)

    return StateDocument(
        reference_data=normalize_reference_data(source.get("referenceData")),
        sessions=sessions,
    )
