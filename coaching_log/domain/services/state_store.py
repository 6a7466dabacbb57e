"""State store: the single owner of the coaching log document."""

import logging
import threading
from collections.abc import Mapping
from typing import Any, Callable, List, Optional, Union

from ..entities.coaching_session import (
    REQUIRED_SESSION_FIELDS,
    CoachingSession,
    new_session_id,
    utc_timestamp,
)
from ..entities.errors import ConflictError, NotFoundError, StorageError, ValidationError
from ..entities.reference_data import ReferenceCategory
from ..entities.state_document import StateDocument
from ..interfaces.state_repository import StateRepository
from .normalizer import clean_text, normalize_state, parse_duration

logger = logging.getLogger(__name__)


def presentation_order(sessions: List[CoachingSession]) -> List[CoachingSession]:
    """Sort sessions newest date first, then newest creation first."""
    return sorted(sessions, key=lambda session: (session.date, session.created_at), reverse=True)


class StateStore:
    """
    Authoritative in-memory state document with write-through persistence.

    The document is loaded lazily on first access. Every operation runs under
    one re-entrant lock, held from the start of a mutation until its full-
    document write returns, so callers never observe a half-applied change
    and writes reach the repository in mutation order.

    A mutation whose write fails stays applied in memory; the StorageError
    still propagates to the caller.
    """

    def __init__(
        self,
        repository: StateRepository,
        clock: Callable[[], str] = utc_timestamp,
        id_factory: Callable[[], str] = new_session_id,
    ):
        """
        Initialize the store.

        Args:
            repository: Durable storage for the document
            clock: Source of ISO-8601 creation timestamps
            id_factory: Source of new session identifiers
        """
        self._repository = repository
        self._clock = clock
        self._id_factory = id_factory
        self._lock = threading.RLock()
        self._document: Optional[StateDocument] = None
        self._last_created_at = ""

    @property
    def repository(self) -> StateRepository:
        return self._repository

    def get_state(self) -> StateDocument:
        """Return a deep copy of the current document."""
        with self._lock:
            return self._ensure_loaded().model_copy(deep=True)

    def list_sessions(
        self,
        coach: Optional[str] = None,
        coachee: Optional[str] = None,
        status: Optional[str] = None,
        date: Optional[str] = None,
    ) -> List[CoachingSession]:
        """
        List sessions matching every given filter, in presentation order.

        Filters are exact matches; empty or None filters are ignored.
        """
        filters = {"coach": coach, "coachee": coachee, "status": status, "date": date}
        active = {field: value for field, value in filters.items() if value}

        with self._lock:
            matches = [
                session.model_copy()
                for session in self._ensure_loaded().sessions
                if all(getattr(session, field) == value for field, value in active.items())
            ]
        return presentation_order(matches)

    def create_session(self, payload: Any) -> CoachingSession:
        """
        Record a new session.

        Args:
            payload: Raw session fields using the wire (camelCase) names

        Returns:
            The stored session, including its generated id and createdAt

        Raises:
            ValidationError: If a required field is blank
            StorageError: If the document could not be written
        """
        if not isinstance(payload, Mapping):
            raise ValidationError("Session payload must be an object.")

        required = {}
        for field in REQUIRED_SESSION_FIELDS:
            value = clean_text(payload.get(field))
            if not value:
                raise ValidationError(f'Field "{field}" is required.')
            required[field] = value

        with self._lock:
            document = self._ensure_loaded()
            session = CoachingSession(
                id=self._new_session_id(document),
                date=required["date"],
                coach=required["coach"],
                coachee=required["coachee"],
                session_type=required["sessionType"],
                focus_area=required["focusArea"],
                status=required["status"],
                duration=parse_duration(payload.get("duration")),
                follow_up=clean_text(payload.get("followUp")),
                highlights=clean_text(payload.get("highlights")),
                actions=clean_text(payload.get("actions")),
                created_at=self._next_created_at(),
            )
            document.sessions.insert(0, session)
            logger.info(f"Created session {session.id} for {session.coachee} on {session.date}")
            self._persist()
            return session.model_copy()

    def add_reference_value(
        self, category: Union[ReferenceCategory, str], value: Any
    ) -> List[str]:
        """
        Append a value to a reference category.

        Returns:
            The category's updated value list

        Raises:
            NotFoundError: If the category is unknown
            ValidationError: If the value is blank
            ConflictError: If the value already exists, ignoring case
            StorageError: If the document could not be written
        """
        category = ReferenceCategory.parse(category)
        text = clean_text(value)
        if not text:
            raise ValidationError("Value is required.")

        with self._lock:
            values = self._ensure_loaded().reference_data.values(category)
            lowered = text.lower()
            if any(item.lower() == lowered for item in values):
                raise ConflictError("That entry already exists.")

            values.append(text)
            logger.info(f"Added {text!r} to {category.value}")
            self._persist()
            return list(values)

    def remove_reference_value(
        self, category: Union[ReferenceCategory, str], value: Any
    ) -> List[str]:
        """
        Remove a value from a reference category.

        The value must match exactly. Values still referenced by a session
        are never removed; callers reassign those sessions first.

        Returns:
            The category's updated value list

        Raises:
            NotFoundError: If the category is unknown or the value is absent
            ValidationError: If the value is blank
            ConflictError: If any session references the value
            StorageError: If the document could not be written
        """
        category = ReferenceCategory.parse(category)
        text = clean_text(value)
        if not text:
            raise ValidationError("Value is required.")

        with self._lock:
            values = self._ensure_loaded().reference_data.values(category)
            if text not in values:
                raise NotFoundError("Entry not found.")
            if self.is_value_in_use(category, text):
                raise ConflictError("Entry is used in sessions and cannot be removed.")

            values.remove(text)
            logger.info(f"Removed {text!r} from {category.value}")
            self._persist()
            return list(values)

    def is_value_in_use(self, category: Union[ReferenceCategory, str], value: str) -> bool:
        """Check whether any session records ``value`` for ``category``."""
        category = ReferenceCategory.parse(category)
        with self._lock:
            return any(
                session.value_for(category) == value
                for session in self._ensure_loaded().sessions
            )

    def _ensure_loaded(self) -> StateDocument:
        """Load the document on first access. Caller holds the lock."""
        if self._document is not None:
            return self._document

        try:
            raw = self._repository.load()
        except FileNotFoundError:
            logger.info("No stored state found, seeding defaults")
        except (OSError, ValueError, RecursionError) as e:
            logger.warning(f"Unable to read stored state, using defaults instead: {e}")
        else:
            self._document = normalize_state(raw)
            logger.info(
                f"Loaded state with {len(self._document.sessions)} sessions"
            )
            return self._document

        self._document = StateDocument()
        try:
            self._persist()
        except StorageError as e:
            logger.error(f"Unable to write seeded state: {e}", exc_info=True)
        return self._document

    def _persist(self) -> None:
        """Write the whole document. Caller holds the lock."""
        self._repository.save(self._document.to_json_dict())

    def _new_session_id(self, document: StateDocument) -> str:
        existing = {session.id for session in document.sessions}
        session_id = self._id_factory()
        while session_id in existing:
            session_id = self._id_factory()
        return session_id

    def _next_created_at(self) -> str:
        # Never hand out a timestamp older than the previous one.
        stamp = max(self._clock(), self._last_created_at)
        self._last_created_at = stamp
        return stamp
