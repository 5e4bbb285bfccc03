"""Errors raised while generating puzzle geometry."""

from __future__ import annotations


class PuzzleError(ValueError):
    """Base class for generation-time failures."""


class InvalidConfiguration(PuzzleError):
    """Grid size, difficulty or board dimensions are unusable."""


class InvalidDimension(PuzzleError):
    """A piece outline was requested for a non-positive size."""
