"""Coaching log: a JSON-backed logbook of coaching sessions."""

__version__ = "0.1.0"
