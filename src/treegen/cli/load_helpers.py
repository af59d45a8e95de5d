from __future__ import annotations

"""Shared helpers for building generation settings with CLI-friendly errors."""

from typing import Any

import typer
from rich.console import Console

from treegen.cli.paths import default_config_path
from treegen.core.config import GenerationConfig
from treegen.core.errors import ConfigurationError
from treegen.io.config_loader import load_config
from treegen.io.errors import LoaderError


def load_config_or_exit(
    path: str | None,
    *,
    console: Console,
    verbose_errors: bool = False,
    **overrides: Any,
) -> GenerationConfig:
    """Load the config file (if any) and apply command-line overrides.

    Exits with code 1 when the file cannot be loaded and code 2 when the
    resulting parameters are invalid.
    """
    resolved = default_config_path(path)
    try:
        config = load_config(resolved) if resolved else GenerationConfig()
    except LoaderError as err:
        if verbose_errors and err.cause:
            console.print(f"[red]Failed to load configuration:[/red] {err.message}\n{err.cause}")
        else:
            console.print(f"[red]Failed to load configuration:[/red] {err}")
        raise typer.Exit(code=1)
    try:
        return config.with_overrides(**overrides)
    except ConfigurationError as err:
        console.print(f"[red]Invalid parameters:[/red] {err}")
        raise typer.Exit(code=2)


__all__ = ["load_config_or_exit"]
