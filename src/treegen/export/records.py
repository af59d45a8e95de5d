"""Presentation-neutral tabular records handed to report sinks."""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, Field, model_validator


class SheetTable(BaseModel):
    """
    A titled table: header row, column-header row, then data rows.

    Rows are plain values (ints, floats, strings); how they are laid out in a
    spreadsheet or file is up to the sink.
    """

    title: str
    columns: List[str] = Field(default_factory=list)
    rows: List[List[Any]] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_row_width(self) -> "SheetTable":
        width = len(self.columns)
        for idx, row in enumerate(self.rows, start=1):
            if width and len(row) != width:
                raise ValueError(f"row {idx} has {len(row)} values, expected {width}")
        return self

    def as_rows(self) -> List[List[Any]]:
        """Flatten to [[title], columns, *rows]."""
        return [[self.title], list(self.columns), *[list(row) for row in self.rows]]

    def records(self) -> List[dict]:
        """Data rows as ordered mappings keyed by column name."""
        return [dict(zip(self.columns, row)) for row in self.rows]


__all__ = ["SheetTable"]
