"""Sparse, 1-based grid of classified cell values.

Decoders fill a :class:`CellGrid` through :func:`classify_value`, which maps
whatever Python object the decoder produced onto exactly one ``CellValue``
variant. Objects of an unexpected shape are not an error: they are logged and
kept as text so a single odd cell never aborts a table.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from datetime import date, datetime, time, timedelta
from typing import Any

from sheet_table_extraction.models import (
    EMPTY,
    BooleanValue,
    Cell,
    CellValue,
    DateTimeValue,
    EmptyValue,
    FormulaValue,
    NumberValue,
    ScalarValue,
    TextValue,
)
from sheet_table_extraction.utils.coordinates import CellBounds, to_address
from sheet_table_extraction.utils.logging import get_logger

logger = get_logger(__name__)

# Serial 0 in the 1900 date system; serials above 59 skip the phantom 1900-02-29.
_EXCEL_EPOCH = datetime(1899, 12, 31)
_EXCEL_TIME_EPOCH = datetime(1899, 12, 30)
_LEAP_BUG_SERIAL = 59


def excel_serial_to_datetime(serial: float) -> datetime:
    """Convert a 1900-system Excel serial number to a datetime."""
    days = serial - 1 if serial > _LEAP_BUG_SERIAL else serial
    return _EXCEL_EPOCH + timedelta(days=days)


def _classify_scalar(raw: Any, *, is_date: bool) -> ScalarValue | EmptyValue:
    if raw is None or raw == "":
        return EMPTY
    if isinstance(raw, bool):
        return BooleanValue(raw)
    if isinstance(raw, (int, float)):
        if is_date:
            return DateTimeValue(excel_serial_to_datetime(float(raw)))
        return NumberValue(float(raw))
    if isinstance(raw, datetime):
        return DateTimeValue(raw)
    if isinstance(raw, date):
        return DateTimeValue(datetime.combine(raw, time()))
    if isinstance(raw, time):
        return DateTimeValue(datetime.combine(_EXCEL_TIME_EPOCH.date(), raw))
    if isinstance(raw, str):
        return TextValue(raw)

    # Rich text: a sequence of runs, each plain text or exposing ``.text``.
    if isinstance(raw, Sequence) and not isinstance(raw, (bytes, bytearray)):
        runs = [
            run if isinstance(run, str) else getattr(run, "text", None) for run in raw
        ]
        if runs and all(isinstance(run, str) for run in runs):
            return TextValue("".join(runs))

    # Hyperlink objects carry display text and/or a target.
    display = getattr(raw, "display", None)
    target = getattr(raw, "target", None)
    if isinstance(display, str) or isinstance(target, str):
        return TextValue(display or target or "")

    text = getattr(raw, "text", None)
    if isinstance(text, str):
        return TextValue(text)

    logger.debug(
        "Unrecognized cell shape coerced to text",
        shape=type(raw).__name__,
    )
    return TextValue(str(raw))


def classify_value(
    raw: Any,
    *,
    formula: str | None = None,
    is_date: bool = False,
) -> CellValue:
    """Classify a decoded value into a ``CellValue`` variant.

    Args:
        raw: The value (or cached formula result) produced by the decoder.
        formula: Formula text when the cell holds a formula.
        is_date: Whether a numeric value carries a date number format.

    Returns:
        Exactly one ``CellValue`` variant. Already-classified values are
        returned unchanged.
    """
    if isinstance(
        raw,
        (NumberValue, TextValue, BooleanValue, DateTimeValue, FormulaValue, EmptyValue),
    ):
        return raw

    scalar = _classify_scalar(raw, is_date=is_date)
    if formula is not None:
        result = None if isinstance(scalar, EmptyValue) else scalar
        return FormulaValue(formula=formula, result=result)
    return scalar


class CellGrid:
    """Rectangular, 1-based container of classified cell values.

    Storage is sparse: unset positions read back as Empty.
    """

    def __init__(self) -> None:
        self._cells: dict[tuple[int, int], CellValue] = {}

    def __len__(self) -> int:
        return len(self._cells)

    def set(self, row: int, col: int, value: Any) -> None:
        """Store ``value`` at ``(row, col)``; Empty values clear the cell.

        Raw values are classified first, so every stored value is a
        ``CellValue`` variant.
        """
        if row < 1 or col < 1:
            # Validated through the codec so the error type matches.
            to_address(row, col)
        value = classify_value(value)
        if isinstance(value, EmptyValue):
            self._cells.pop((row, col), None)
        else:
            self._cells[(row, col)] = value

    def get(self, row: int, col: int) -> CellValue:
        return self._cells.get((row, col), EMPTY)

    def values(self) -> Iterator[CellValue]:
        """Iterate over the non-empty values in no particular order."""
        return iter(self._cells.values())

    def cell(self, row: int, col: int) -> Cell:
        """Return the immutable :class:`Cell` at ``(row, col)``."""
        return Cell(
            address=to_address(row, col),
            row=row,
            col=col,
            value=self.get(row, col),
        )

    def occupied_bounds(self) -> CellBounds | None:
        """Bounding box of every non-empty cell, or None for an empty grid."""
        if not self._cells:
            return None
        rows = [row for row, _ in self._cells]
        cols = [col for _, col in self._cells]
        return CellBounds(min(rows), min(cols), max(rows), max(cols))

    def extract(self, bounds: CellBounds) -> list[list[Cell]]:
        """Materialize ``bounds`` as rows of cells, one per column."""
        return [
            [self.cell(row, col) for col in range(bounds.start_col, bounds.end_col + 1)]
            for row in range(bounds.start_row, bounds.end_row + 1)
        ]

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Iterable[Any]],
        start_row: int = 1,
        start_col: int = 1,
    ) -> CellGrid:
        """Build a grid from rows of raw Python values.

        Values go through :func:`classify_value`, so ``None`` leaves a gap and
        formula cells must be passed as :class:`FormulaValue`.
        """
        grid = cls()
        for row_offset, values in enumerate(rows):
            for col_offset, raw in enumerate(values):
                grid.set(start_row + row_offset, start_col + col_offset, raw)
        return grid
