"""Spaced-repetition scheduling and session composition for vocabulary drills."""

__version__ = "1.0.0"
