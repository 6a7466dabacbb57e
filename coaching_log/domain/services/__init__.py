"""Domain services for the coaching log."""

from .normalizer import (
    clean_text,
    normalize_reference_data,
    normalize_session,
    normalize_state,
    parse_duration,
)
from .state_store import StateStore, presentation_order

__all__ = [
    "StateStore",
    "presentation_order",
    "clean_text",
    "parse_duration",
    "normalize_reference_data",
    "normalize_session",
    "normalize_state",
]
