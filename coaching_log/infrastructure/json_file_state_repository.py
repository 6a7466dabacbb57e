"""JSON file implementation of the State Repository."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Union

from ..domain.entities.errors import StorageError
from ..domain.interfaces.state_repository import StateRepository

logger = logging.getLogger(__name__)


class JsonFileStateRepository(StateRepository):
    """Stores the state document as one pretty-printed JSON file.

    Writes go to a sibling temporary file that is then renamed over the
    target, so a crash mid-write leaves the previous document intact.
    """

    def __init__(self, path: Union[str, Path]):
        """Initialize the repository.

        Args:
            path: Location of the state file. Its directory is created on
                  the first write.
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Any:
        """Read and decode the state file.

        Raises:
            FileNotFoundError: If the state file does not exist yet.
            OSError: If the file cannot be read.
            ValueError: If the file is not valid UTF-8 JSON, including
                        documents nested too deeply to decode.
        """
        with self._path.open("r", encoding="utf-8") as handle:
            try:
                return json.load(handle)
            except RecursionError:
                raise ValueError(f"State file {self._path} is nested too deeply to decode") from None

    def save(self, document: Dict[str, Any]) -> None:
        """Write the whole document, replacing the previous file.

        Raises:
            StorageError: If the directory or file cannot be written.
        """
        payload = json.dumps(document, indent=2, ensure_ascii=False)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise StorageError(f"Unable to write state file {self._path}: {e}") from e
        logger.debug(f"Wrote state file {self._path}")
