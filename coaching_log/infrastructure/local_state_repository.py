"""Local in-memory implementation of the State Repository."""

import copy
from typing import Any, Dict, Optional

from ..domain.interfaces.state_repository import StateRepository


class LocalStateRepository(StateRepository):
    """Local in-memory implementation of the State Repository.

    Keeps a private copy of the last saved document, for testing and
    development purposes.
    """

    def __init__(self, document: Optional[Dict[str, Any]] = None):
        """Initialize the repository, optionally with a stored document."""
        self._document: Optional[Dict[str, Any]] = copy.deepcopy(document)
        self.save_count = 0

    def load(self) -> Any:
        """Return a copy of the stored document.

        Raises:
            FileNotFoundError: If no document has been stored.
        """
        if self._document is None:
            raise FileNotFoundError("No state document has been saved")
        return copy.deepcopy(self._document)

    def save(self, document: Dict[str, Any]) -> None:
        """Store a copy of the document."""
        self._document = copy.deepcopy(document)
        self.save_count += 1

    def clear(self) -> None:
        """Forget the stored document."""
        self._document = None

    def get_saved_document(self) -> Optional[Dict[str, Any]]:
        """Get the last saved document, if any."""
        return copy.deepcopy(self._document)
