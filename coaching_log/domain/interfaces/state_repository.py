"""State repository protocol."""

from typing import Any, Dict, Protocol, runtime_checkable


@runtime_checkable
class StateRepository(Protocol):
    """Protocol for durable storage of the whole state document.

    Implementations store and return the document as a plain JSON-compatible
    dictionary. Validation is not their concern: whatever ``load`` returns is
    passed through the normalizer before the store uses it.
    """

    def load(self) -> Any:
        """Read the stored document.

        Returns:
            The raw decoded document, possibly malformed.

        Raises:
            FileNotFoundError: If nothing has been stored yet.
            OSError: If the storage cannot be read.
            ValueError: If the stored bytes are not valid JSON.
        """
        ...

    def save(self, document: Dict[str, Any]) -> None:
        """Replace the stored document with ``document``.

        Args:
            document: The full state document in its JSON shape.

        Raises:
            StorageError: If the document could not be written.
        """
        ...
