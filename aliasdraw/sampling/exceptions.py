"""
Errors raised while building an alias table.
"""
from __future__ import annotations


class SamplerError(Exception):
    """Base exception for weighted sampling failures."""


class EmptyCollectionError(SamplerError):
    """Raised when a table is built over a collection with no items."""


class InvalidWeightError(SamplerError, ValueError):
    """Raised when a weight is negative or not a finite number."""

    def __init__(self, index: int, weight: float):
        super().__init__(f"invalid weight {weight!r} at index {index}")
        self.index = index
        self.weight = weight


class ZeroTotalWeightError(SamplerError, ValueError):
    """Raised when all weights sum to zero, which leaves no distribution."""
