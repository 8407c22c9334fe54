"""Dataclasses representing an extracted workbook."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sheet_table_extraction.models import MergeRange, Table


@dataclass
class Sheet:
    """Tables and merges of a single worksheet."""

    name: str
    index: int
    tables: list[Table]
    merged_cells: list[MergeRange]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "index": self.index,
            "tables": [table.to_dict() for table in self.tables],
            "merged_cells": [merge.to_dict() for merge in self.merged_cells],
        }


@dataclass
class WorkbookDocument:
    """A workbook with one entry per extracted sheet."""

    sheets: list[Sheet]
    metadata: dict[str, Any] = field(default_factory=dict)

    def get_sheet(self, name: str) -> Sheet | None:
        return next((sheet for sheet in self.sheets if sheet.name == name), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sheets": [sheet.to_dict() for sheet in self.sheets],
            "metadata": self.metadata,
        }
