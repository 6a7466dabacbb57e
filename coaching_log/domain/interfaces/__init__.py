"""Domain interfaces for the coaching log."""

from .state_repository import StateRepository

__all__ = ["StateRepository"]
