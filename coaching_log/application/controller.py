"""Coaching Log Controller for handling request-level coordination."""

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Tuple, Union

from ..domain.entities import AccessDeniedError, ReferenceCategory
from ..domain.services import StateStore

logger = logging.getLogger(__name__)


class CoachingLogController:
    """
    Controller for coordinating coaching log operations.

    This controller is injected with the state store and handles the
    per-endpoint work, keeping the API layer thin. It speaks the wire
    format: everything it returns is JSON-ready.
    """

    def __init__(self, state_store: StateStore, admin_emails: Iterable[str] = ()):
        """
        Initialize the controller with injected dependencies.

        Args:
            state_store: The store owning the coaching log document
            admin_emails: Lower-cased allow-list; empty disables the check
        """
        self.state_store = state_store
        self.admin_emails = frozenset(email.strip().lower() for email in admin_emails)

        logger.info("CoachingLogController initialized")

    def check_access(self, email: Optional[str]) -> None:
        """
        Check an identity asserted by the external sign-in provider.

        Raises:
            AccessDeniedError: If an allow-list is configured and the email
                is missing or not on it
        """
        if not self.admin_emails:
            return

        normalized = (email or "").strip().lower()
        if normalized not in self.admin_emails:
            logger.warning(f"Denied access for {normalized or 'anonymous user'}")
            raise AccessDeniedError("This account is not allowed to access the coaching log.")

    def get_state(self) -> dict:
        return self.state_store.get_state().to_json_dict()

    def create_session(self, payload: Any) -> dict:
        return self.state_store.create_session(payload).to_json_dict()

    def add_reference_value(self, category: Union[ReferenceCategory, str], value: Any) -> List[str]:
        return self.state_store.add_reference_value(category, value)

    def remove_reference_value(self, category: Union[ReferenceCategory, str], value: Any) -> List[str]:
        return self.state_store.remove_reference_value(category, value)

    def list_sessions(
        self,
        coach: Optional[str] = None,
        coachee: Optional[str] = None,
        status: Optional[str] = None,
        date: Optional[str] = None,
    ) -> List[dict]:
        """
        List sessions for the session log view.

        Returns:
            Matching sessions, newest date first
        """
        sessions = self.state_store.list_sessions(
            coach=coach, coachee=coachee, status=status, date=date
        )
        return [session.to_json_dict() for session in sessions]

    def get_sessions_for_day(
        self, day: Optional[str] = None, limit: Optional[int] = None
    ) -> List[dict]:
        """
        List the sessions held on one day (today, UTC, by default).

        Args:
            day: Calendar date as YYYY-MM-DD
            limit: Keep only the first ``limit`` sessions
        """
        day = day or _today()
        sessions = self.list_sessions(date=day)
        if limit is not None:
            sessions = sessions[:limit]
        return sessions

    def export_state(self, day: Optional[str] = None) -> Tuple[str, dict]:
        """
        Produce a downloadable copy of the whole document.

        Returns:
            Tuple of (suggested file name, document)
        """
        filename = f"coaching-log-{day or _today()}.json"
        return filename, self.get_state()

    def get_health_status(self) -> dict:
        """
        Get application health status.

        Returns:
            Dict containing health status information
        """
        return {
            "status": "healthy",
            "providers": {
                "state_repository": type(self.state_store.repository).__name__,
            },
        }


def _today() -> str:
    return datetime.now(timezone.utc).date().isoformat()
