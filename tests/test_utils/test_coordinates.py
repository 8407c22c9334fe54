"""Tests for A1 address conversion."""

import pytest

from sheet_table_extraction.utils.coordinates import (
    CellBounds,
    column_letters,
    from_address,
    parse_range,
    to_address,
)
from sheet_table_extraction.utils.exceptions import (
    CoordinateError,
    ErrorCode,
    InvalidAddressError,
    InvalidCoordinateError,
    InvalidRangeError,
)


class TestToAddress:
    """Tests for to_address."""

    @pytest.mark.parametrize(
        ("row", "col", "expected"),
        [
            (1, 1, "A1"),
            (99, 26, "Z99"),
            (1, 27, "AA1"),
            (3, 28, "AB3"),
            (10, 52, "AZ10"),
            (1, 53, "BA1"),
            (1, 702, "ZZ1"),
            (1, 703, "AAA1"),
            (1048576, 16384, "XFD1048576"),
        ],
    )
    def test_known_addresses(self, row: int, col: int, expected: str) -> None:
        assert to_address(row, col) == expected

    @pytest.mark.parametrize(("row", "col"), [(0, 1), (1, 0), (-1, 3), (2, -5)])
    def test_non_positive_coordinates_rejected(self, row: int, col: int) -> None:
        with pytest.raises(InvalidCoordinateError) as exc_info:
            to_address(row, col)
        assert exc_info.value.error_code == ErrorCode.INVALID_COORDINATE
        assert exc_info.value.details == {"row": row, "col": col}

    def test_column_letters_of_zero_is_empty(self) -> None:
        assert column_letters(0) == ""


class TestFromAddress:
    """Tests for from_address."""

    def test_parses_multi_letter_columns(self) -> None:
        assert from_address("A1") == (1, 1)
        assert from_address("AA3") == (3, 27)
        assert from_address("XFD1048576") == (1048576, 16384)

    @pytest.mark.parametrize(
        "address",
        ["", "1A", "a1", "A", "12", "A1B", "$A$1", "A 1", "A0", "A1\n", " A1"],
    )
    def test_malformed_addresses_rejected(self, address: str) -> None:
        with pytest.raises(InvalidAddressError) as exc_info:
            from_address(address)
        assert exc_info.value.address == address

    def test_invalid_address_is_value_error(self) -> None:
        """Callers catching ValueError still see codec failures."""
        with pytest.raises(ValueError):
            from_address("not-an-address")

    @pytest.mark.parametrize(
        ("row", "col"),
        [(1, 1), (1, 26), (7, 27), (500, 702), (65536, 703), (1048576, 16384)],
    )
    def test_inverse_of_to_address(self, row: int, col: int) -> None:
        assert from_address(to_address(row, col)) == (row, col)

    def test_inverse_over_every_column(self) -> None:
        for col in range(1, 16385):
            assert from_address(to_address(42, col)) == (42, col)


class TestParseRange:
    """Tests for parse_range and CellBounds."""

    def test_two_part_range(self) -> None:
        bounds = parse_range("B2:D5")
        assert bounds == CellBounds(2, 2, 5, 4)
        assert bounds.height == 4
        assert bounds.width == 3

    def test_single_cell_is_one_by_one(self) -> None:
        bounds = parse_range("C7")
        assert bounds == CellBounds(7, 3, 7, 3)
        assert (bounds.height, bounds.width) == (1, 1)

    def test_to_range_round_trip(self) -> None:
        assert parse_range("A1:XFD3").to_range() == "A1:XFD3"
        assert parse_range("B2").to_range() == "B2:B2"

    def test_inverted_range_rejected(self) -> None:
        with pytest.raises(InvalidRangeError):
            parse_range("C3:A1")

    def test_bad_half_rejected(self) -> None:
        with pytest.raises(CoordinateError):
            parse_range("A1:ZZ")

    def test_contains_and_encloses(self) -> None:
        outer = CellBounds(1, 1, 5, 5)
        assert outer.contains(1, 1)
        assert outer.contains(5, 5)
        assert not outer.contains(6, 1)
        assert outer.encloses(CellBounds(2, 2, 5, 5))
        assert not outer.encloses(CellBounds(2, 2, 6, 5))
