"""Data models for classified cells, merges and extracted tables.

A cell value is one of six frozen variants (``NumberValue``, ``TextValue``,
``BooleanValue``, ``DateTimeValue``, ``FormulaValue``, ``EmptyValue``)
collected under the ``CellValue`` union. Consumers dispatch on the variant
with ``match`` rather than inspecting raw Python types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, TypeAlias

from sheet_table_extraction.utils.coordinates import CellBounds


class CellType(str, Enum):
    """Tag naming which variant a cell value is."""

    NUMBER = "number"
    TEXT = "text"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    FORMULA = "formula"
    EMPTY = "empty"


@dataclass(frozen=True)
class NumberValue:
    value: float
    cell_type: CellType = field(default=CellType.NUMBER, init=False)


@dataclass(frozen=True)
class TextValue:
    value: str
    cell_type: CellType = field(default=CellType.TEXT, init=False)


@dataclass(frozen=True)
class BooleanValue:
    value: bool
    cell_type: CellType = field(default=CellType.BOOLEAN, init=False)


@dataclass(frozen=True)
class DateTimeValue:
    value: datetime
    cell_type: CellType = field(default=CellType.DATETIME, init=False)


@dataclass(frozen=True)
class EmptyValue:
    cell_type: CellType = field(default=CellType.EMPTY, init=False)


@dataclass(frozen=True)
class FormulaValue:
    """A formula together with its cached result, when the file has one."""

    formula: str
    result: ScalarValue | None = None
    cell_type: CellType = field(default=CellType.FORMULA, init=False)


ScalarValue: TypeAlias = NumberValue | TextValue | BooleanValue | DateTimeValue
CellValue: TypeAlias = ScalarValue | FormulaValue | EmptyValue

EMPTY = EmptyValue()


def format_number(number: float) -> str:
    """Render integral floats without the trailing ``.0``."""
    if number.is_integer():
        return str(int(number))
    return repr(number)


def display_text(value: CellValue) -> str:
    """Return the string shown for a value in markdown and header labels."""
    match value:
        case NumberValue(value=number):
            return format_number(number)
        case TextValue(value=text):
            return text
        case BooleanValue(value=flag):
            return "true" if flag else "false"
        case DateTimeValue(value=moment):
            return moment.isoformat()
        case FormulaValue(result=result):
            return display_text(result) if result is not None else ""
        case EmptyValue():
            return ""
    raise TypeError(f"Unknown cell value variant: {type(value).__name__}")


def native_value(value: CellValue) -> Any:
    """Return the plain Python value written into JSON projections."""
    match value:
        case NumberValue(value=number):
            return number
        case TextValue(value=text):
            return text
        case BooleanValue(value=flag):
            return flag
        case DateTimeValue(value=moment):
            return moment
        case FormulaValue(result=result):
            return native_value(result) if result is not None else None
        case EmptyValue():
            return None
    raise TypeError(f"Unknown cell value variant: {type(value).__name__}")


@dataclass(frozen=True)
class Cell:
    """A classified cell at a fixed sheet position."""

    address: str
    row: int
    col: int
    value: CellValue

    @property
    def display(self) -> str:
        return display_text(self.value)

    @property
    def formula(self) -> str | None:
        if isinstance(self.value, FormulaValue):
            return self.value.formula
        return None


@dataclass(frozen=True)
class MergeRange:
    """A merged block of cells carrying its top-left (anchor) value."""

    bounds: CellBounds
    anchor_value: CellValue = EMPTY

    @property
    def ref(self) -> str:
        return self.bounds.to_range()

    @property
    def col_span(self) -> int:
        return self.bounds.width

    @property
    def row_span(self) -> int:
        return self.bounds.height

    def covers(self, row: int, col: int) -> bool:
        return self.bounds.contains(row, col)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form; the anchor is its native value (datetimes as ISO)."""
        return {
            "ref": self.ref,
            "value": _jsonable(native_value(self.anchor_value)),
            "col_span": self.col_span,
            "row_span": self.row_span,
        }


@dataclass(frozen=True)
class TableRegion:
    """A rectangle of a sheet that is materialized as one table."""

    name: str
    bounds: CellBounds


@dataclass(frozen=True)
class HeaderNode:
    """Header labels for one column, outermost first."""

    column: int
    path: tuple[str, ...]

    @property
    def final_header(self) -> str:
        return self.path[-1]


@dataclass
class ExtractionOptions:
    """Options controlling table extraction."""

    convert_to_json: bool = False


@dataclass(frozen=True)
class Table:
    """A table region extracted from a sheet, with its renderings.

    ``grid`` is rectangular: every row holds exactly one cell per column of
    the region. ``merges`` holds only the sheet merges fully inside the
    region. ``json`` is populated only when JSON conversion was requested.
    """

    name: str
    range: str
    column_labels: tuple[str, ...]
    grid: tuple[tuple[Cell, ...], ...]
    merges: tuple[MergeRange, ...]
    has_hierarchical_headers: bool
    markdown: str
    json: tuple[dict[str, Any], ...] | None = None

    @property
    def row_count(self) -> int:
        return len(self.grid)

    @property
    def column_count(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary.

        Datetimes are rendered in ISO-8601 form.
        """
        return {
            "name": self.name,
            "range": self.range,
            "columns": list(self.column_labels),
            "row_count": self.row_count,
            "column_count": self.column_count,
            "merged_headers": [merge.to_dict() for merge in self.merges],
            "has_hierarchical_headers": self.has_hierarchical_headers,
            "markdown": self.markdown,
            "json": _jsonable(list(self.json)) if self.json is not None else None,
        }


def _jsonable(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_jsonable(item) for item in value]
    return value
