"""Tests for value classification and the sparse cell grid."""

import logging
from datetime import date, datetime, time

import pytest

from sheet_table_extraction.cell_grid import (
    CellGrid,
    classify_value,
    excel_serial_to_datetime,
)
from sheet_table_extraction.models import (
    EMPTY,
    BooleanValue,
    DateTimeValue,
    FormulaValue,
    NumberValue,
    TextValue,
)
from sheet_table_extraction.utils.coordinates import CellBounds
from sheet_table_extraction.utils.exceptions import InvalidCoordinateError


class _Run:
    def __init__(self, text: str) -> None:
        self.text = text


class _Hyperlink:
    def __init__(self, display: str | None, target: str | None) -> None:
        self.display = display
        self.target = target


class _Opaque:
    def __str__(self) -> str:
        return "opaque-object"


class TestExcelSerial:
    """Tests for excel_serial_to_datetime."""

    @pytest.mark.parametrize(
        ("serial", "expected"),
        [
            (1, datetime(1900, 1, 1)),
            (59, datetime(1900, 2, 28)),
            (61, datetime(1900, 3, 1)),
            (44927, datetime(2023, 1, 1)),
            (45000.5, datetime(2023, 3, 15, 12, 0)),
        ],
    )
    def test_known_serials(self, serial: float, expected: datetime) -> None:
        assert excel_serial_to_datetime(serial) == expected


class TestClassifyValue:
    """Tests for classify_value."""

    @pytest.mark.parametrize("raw", [None, ""])
    def test_blank_is_empty(self, raw: object) -> None:
        assert classify_value(raw) == EMPTY

    def test_numbers(self) -> None:
        assert classify_value(7) == NumberValue(7.0)
        assert classify_value(1.5) == NumberValue(1.5)

    def test_booleans_are_not_numbers(self) -> None:
        assert classify_value(True) == BooleanValue(True)
        assert classify_value(False) == BooleanValue(False)

    def test_date_formatted_number(self) -> None:
        assert classify_value(44927, is_date=True) == DateTimeValue(
            datetime(2023, 1, 1)
        )

    def test_dates_and_times(self) -> None:
        moment = datetime(2024, 5, 6, 7, 8)
        assert classify_value(moment) == DateTimeValue(moment)
        assert classify_value(date(2024, 5, 6)) == DateTimeValue(datetime(2024, 5, 6))
        assert classify_value(time(12, 30)) == DateTimeValue(
            datetime(1899, 12, 30, 12, 30)
        )

    def test_text(self) -> None:
        assert classify_value("Region") == TextValue("Region")

    def test_rich_text_runs_concatenated(self) -> None:
        assert classify_value(["Bold ", _Run("and plain")]) == TextValue(
            "Bold and plain"
        )

    def test_hyperlink_prefers_display_text(self) -> None:
        assert classify_value(_Hyperlink("Docs", "https://example.com")) == (
            TextValue("Docs")
        )
        assert classify_value(_Hyperlink(None, "https://example.com")) == (
            TextValue("https://example.com")
        )

    def test_object_with_text_attribute(self) -> None:
        assert classify_value(_Run("note")) == TextValue("note")

    def test_unrecognized_shape_coerced_to_text(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="sheet_table_extraction"):
            value = classify_value(_Opaque())
        assert value == TextValue("opaque-object")
        assert "Unrecognized cell shape" in caplog.text

    def test_formula_with_result(self) -> None:
        assert classify_value(300, formula="=SUM(A3:B3)") == FormulaValue(
            "=SUM(A3:B3)", NumberValue(300.0)
        )

    def test_formula_without_cached_result(self) -> None:
        assert classify_value(None, formula="=NOW()") == FormulaValue("=NOW()")

    def test_classified_values_pass_through(self) -> None:
        value = FormulaValue("=1", NumberValue(1.0))
        assert classify_value(value) is value
        assert classify_value(EMPTY) is EMPTY


class TestCellGrid:
    """Tests for CellGrid."""

    def test_unset_positions_read_empty(self) -> None:
        grid = CellGrid()
        assert grid.get(5, 5) == EMPTY
        assert len(grid) == 0

    def test_set_and_clear(self) -> None:
        grid = CellGrid()
        grid.set(2, 3, TextValue("x"))
        assert grid.get(2, 3) == TextValue("x")
        assert len(grid) == 1
        grid.set(2, 3, EMPTY)
        assert len(grid) == 0

    def test_set_classifies_raw_values(self) -> None:
        grid = CellGrid()
        grid.set(1, 1, 12)
        grid.set(1, 2, _Opaque())
        grid.set(1, 3, "")
        assert grid.get(1, 1) == NumberValue(12.0)
        assert grid.get(1, 2) == TextValue("opaque-object")
        assert grid.cell(1, 2).display == "opaque-object"
        assert len(grid) == 2

    def test_set_rejects_non_positive_coordinates(self) -> None:
        with pytest.raises(InvalidCoordinateError):
            CellGrid().set(0, 1, TextValue("x"))

    def test_cell_carries_address(self) -> None:
        grid = CellGrid.from_rows([["a", "b"]], start_row=4, start_col=27)
        cell = grid.cell(4, 28)
        assert cell.address == "AB4"
        assert cell.display == "b"

    def test_occupied_bounds(self) -> None:
        assert CellGrid().occupied_bounds() is None
        grid = CellGrid.from_rows([[None, "x"], [], [1, None, None, 2]], start_row=3)
        assert grid.occupied_bounds() == CellBounds(3, 1, 5, 4)

    def test_extract_is_rectangular(self) -> None:
        grid = CellGrid.from_rows([["a"], ["b", "c", "d"]])
        rows = grid.extract(CellBounds(1, 1, 2, 3))
        assert [[cell.display for cell in row] for row in rows] == [
            ["a", "", ""],
            ["b", "c", "d"],
        ]
        assert rows[0][2].address == "C1"

    def test_values_skip_gaps(self) -> None:
        grid = CellGrid.from_rows([[1, None, "x"]])
        assert sorted(str(v.cell_type.value) for v in grid.values()) == [
            "number",
            "text",
        ]
