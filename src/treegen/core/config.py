"""
Generation parameters.

A single immutable value carries everything a run needs:
- build_mode: branching policy (random or fixed)
- edges_count: maximum branching per vertex (m)
- graphs_count: population size (R)
- vertex_limit: stopping-rule threshold (N)
- seed / workers / timeout: batch generation controls

Defaults are named on the fields and validated at construction time. Direct
construction raises pydantic's ValidationError; ``GenerationConfig.build`` and
``with_overrides`` are the entry points that report ConfigurationError.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from treegen.core.errors import ConfigurationError

DEFAULT_EDGES_COUNT = 4
DEFAULT_GRAPHS_COUNT = 400
DEFAULT_VERTEX_LIMIT = 100
DEFAULT_WORKERS = 4


class BuildMode(str, Enum):
    """Branching policy used while growing a tree."""

    RANDOM = "random"  # Uniform draws per vertex
    FIXED = "fixed"  # Deterministic, position-dependent counts


class GenerationConfig(BaseModel):
    """Immutable generation parameters, passed by value into the generator."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    build_mode: BuildMode = BuildMode.RANDOM
    edges_count: int = Field(default=DEFAULT_EDGES_COUNT, ge=1)
    graphs_count: int = Field(default=DEFAULT_GRAPHS_COUNT, ge=1)
    vertex_limit: int = Field(default=DEFAULT_VERTEX_LIMIT, ge=1)
    seed: Optional[int] = None
    workers: int = Field(default=DEFAULT_WORKERS, ge=1)
    timeout: Optional[float] = Field(default=None, gt=0)

    @classmethod
    def build(cls, **values: Any) -> "GenerationConfig":
        """Validate keyword values, reporting failures as ConfigurationError."""
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ConfigurationError(format_validation_errors(exc)) from exc

    def with_overrides(self, **values: Any) -> "GenerationConfig":
        """Return a validated copy with the non-None values replaced."""
        updates = {key: value for key, value in values.items() if value is not None}
        if not updates:
            return self
        return GenerationConfig.build(**{**self.model_dump(), **updates})


def format_validation_errors(exc: ValidationError, limit: int = 3) -> str:
    """Compact one-line rendering of pydantic validation errors."""
    error_list = exc.errors()
    snippets = []
    for err in error_list[:limit]:
        loc = ".".join(str(entry) for entry in err.get("loc", [])) or "<root>"
        snippets.append(f"{loc}: {err.get('msg') or err.get('type')}")
    remaining = len(error_list) - len(snippets)
    if remaining > 0:
        snippets.append(f"... ({remaining} more)")
    return "; ".join(snippets)


__all__ = [
    "BuildMode",
    "GenerationConfig",
    "DEFAULT_EDGES_COUNT",
    "DEFAULT_GRAPHS_COUNT",
    "DEFAULT_VERTEX_LIMIT",
    "DEFAULT_WORKERS",
    "format_validation_errors",
]
