"""Error types raised by the generator and the statistics engine."""

from __future__ import annotations


class TreeGenError(Exception):
    """Base class for treegen failures."""


class ConfigurationError(TreeGenError, ValueError):
    """Invalid generation parameters, raised before any generation work."""


class DegenerateAggregateInput(TreeGenError):
    """An aggregate was requested over an empty population."""


class StructuralInvariantViolation(TreeGenError, AssertionError):
    """A tree breaks the single-root / no-orphan / ordered-numbering invariants."""


class GenerationCancelled(TreeGenError):
    """A batch generation task was cancelled before it produced a tree."""


class GenerationTimeout(TreeGenError, TimeoutError):
    """A batch generation job did not finish before its deadline."""


__all__ = [
    "TreeGenError",
    "ConfigurationError",
    "DegenerateAggregateInput",
    "StructuralInvariantViolation",
    "GenerationCancelled",
    "GenerationTimeout",
]
