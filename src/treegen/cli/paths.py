from __future__ import annotations

"""Utilities for resolving configuration and report output paths."""

from pathlib import Path

DEFAULT_CONFIG_NAME = "treegen.yaml"
DEFAULT_WORKBOOK_NAME = "report"


def outputs_dir() -> Path:
    return Path.cwd() / "outputs"


def reports_dir() -> Path:
    return outputs_dir() / "reports"


def ensure_output_dirs() -> None:
    reports_dir().mkdir(parents=True, exist_ok=True)


def default_config_path(path: str | None) -> str | None:
    """Explicit path if given, else ./treegen.yaml when it exists, else None."""
    if path:
        return path
    candidate = Path.cwd() / DEFAULT_CONFIG_NAME
    return str(candidate) if candidate.exists() else None


def resolve_workbook_path(name: str | None) -> str:
    """Resolve a workbook name under outputs/reports.

    Only the base name is kept. If it has no .yaml extension, one is added.
    """
    ensure_output_dirs()
    base = Path(name or DEFAULT_WORKBOOK_NAME).name
    if not base.endswith(".yaml"):
        base = f"{base}.yaml"
    return str(reports_dir() / base)


__all__ = [
    "DEFAULT_CONFIG_NAME",
    "DEFAULT_WORKBOOK_NAME",
    "default_config_path",
    "ensure_output_dirs",
    "outputs_dir",
    "reports_dir",
    "resolve_workbook_path",
]
