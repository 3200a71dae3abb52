"""Caloric balance engine: maintenance calories, goal deficits, streaks and projections."""

__version__ = "0.1.0"
