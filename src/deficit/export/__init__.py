"""Presentation helpers for engine results."""
