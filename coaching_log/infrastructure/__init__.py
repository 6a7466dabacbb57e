"""Infrastructure layer components."""

from .json_file_state_repository import JsonFileStateRepository
from .local_state_repository import LocalStateRepository

__all__ = [
    "JsonFileStateRepository",
    "LocalStateRepository",
]
