"""
Report sinks.

A sink receives named sheets of tabular data. YamlWorkbookSink keeps every
sheet of a workbook in one YAML file:

    sheets:
      Lab 2 - Parameters:
      - [Generated tree parameters]
      - [Parameter, Value]
      - [Height, 7]
      ...

Writing a sheet that already exists replaces it.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Protocol

import yaml

from treegen.export.records import SheetTable
from treegen.utils.logging import log_calls

logger = logging.getLogger(__name__)


class ExportError(RuntimeError):
    """A sink failed to read or write its target."""


class ReportSink(Protocol):
    def write(self, sheet: str, table: SheetTable) -> None: ...


class YamlWorkbookSink:
    """Workbook stored as a single YAML document with one entry per sheet."""

    def __init__(self, path: str | os.PathLike[str]):
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {"sheets": {}}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ExportError(f"Cannot read workbook {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ExportError(f"Workbook {self.path} must be a mapping, got {type(data).__name__}")
        sheets = data.setdefault("sheets", {})
        if not isinstance(sheets, dict):
            raise ExportError(f"Workbook {self.path}: 'sheets' must be a mapping, got {type(sheets).__name__}")
        return data

    @log_calls()
    def write(self, sheet: str, table: SheetTable) -> None:
        data = self._load()
        data["sheets"][sheet] = table.as_rows()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
        except OSError as exc:
            raise ExportError(f"Cannot write workbook {self.path}: {exc}") from exc
        logger.info("Wrote sheet '%s' (%d rows) to %s", sheet, len(table.rows), self.path)

    def sheets(self) -> List[str]:
        return list(self._load()["sheets"].keys())

    def read(self, sheet: str) -> SheetTable:
        """Rebuild a SheetTable from a stored sheet."""
        sheets = self._load()["sheets"]
        if sheet not in sheets:
            available = ", ".join(sheets) or "none"
            raise KeyError(f"Unknown sheet: {sheet}. Available: {available}")
        rows = sheets[sheet]
        return SheetTable(title=rows[0][0], columns=rows[1], rows=rows[2:])


__all__ = ["ExportError", "ReportSink", "YamlWorkbookSink"]
