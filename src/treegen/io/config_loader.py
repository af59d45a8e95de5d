from __future__ import annotations

"""Load generation parameters from YAML files."""

import os
from typing import Any, Dict

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from treegen.core.config import GenerationConfig
from treegen.io.errors import LoaderError
from treegen.utils.logging import log_calls


class ConfigFileSpec(BaseModel):
    """Schema of a treegen configuration file.

    Expected format:
    generation:
      build_mode: random
      edges_count: 4
      graphs_count: 400
      vertex_limit: 100
      seed: 42
    """

    model_config = ConfigDict(extra="forbid")

    generation: GenerationConfig = Field(default_factory=GenerationConfig)


def _read_yaml_file(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@log_calls()
def load_config(path: str) -> GenerationConfig:
    """Read a configuration file; unset fields keep their defaults."""
    if not os.path.exists(path):
        raise LoaderError(path, "Configuration file not found")
    try:
        data = _read_yaml_file(path)
    except yaml.YAMLError as exc:
        raise LoaderError(path, "Malformed YAML", cause=exc) from exc
    if not isinstance(data, dict):
        raise LoaderError(path, "Configuration root must be a mapping")
    try:
        spec = ConfigFileSpec.model_validate(data)
    except ValidationError as exc:
        raise LoaderError(path, "Invalid generation configuration", cause=exc) from exc
    return spec.generation


__all__ = ["ConfigFileSpec", "load_config"]
