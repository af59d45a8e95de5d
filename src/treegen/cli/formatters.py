"""Formatting helpers for CLI presentation."""

from __future__ import annotations

from typing import Any

from rich.table import Table

from treegen.core.config import GenerationConfig
from treegen.export.records import SheetTable


def format_value(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.4f}".rstrip("0").rstrip(".")
    return str(value)


def build_sheet_table(table: SheetTable, limit: int | None = None) -> Table:
    """Render a SheetTable; rows beyond ``limit`` are summarised in the caption."""
    rich_table = Table(title=table.title, show_header=True, header_style="bold blue")
    for idx, column in enumerate(table.columns):
        rich_table.add_column(column, style="cyan" if idx == 0 else None, justify="left" if idx == 0 else "right")
    rows = table.rows if limit is None else table.rows[:limit]
    for row in rows:
        rich_table.add_row(*(format_value(v) for v in row))
    if limit is not None and len(table.rows) > limit:
        rich_table.caption = f"{len(table.rows) - limit} more row(s) not shown"
    return rich_table


def build_config_table(config: GenerationConfig) -> Table:
    table = Table(title="Generation parameters")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for name, value in config.model_dump(mode="json").items():
        table.add_row(name, "-" if value is None else str(value))
    return table


__all__ = [
    "build_config_table",
    "build_sheet_table",
    "format_value",
]
