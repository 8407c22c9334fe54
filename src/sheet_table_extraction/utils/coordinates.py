"""Conversion between 1-based (row, column) pairs and A1-style addresses."""

from __future__ import annotations

import re
from dataclasses import dataclass

from sheet_table_extraction.utils.exceptions import (
    InvalidAddressError,
    InvalidCoordinateError,
    InvalidRangeError,
)

_ADDRESS_RE = re.compile(r"([A-Z]+)([0-9]+)")


def column_letters(col: int) -> str:
    """Return the bijective base-26 column name (1 -> A, 27 -> AA)."""
    letters = ""
    remaining = col
    while remaining > 0:
        remaining, remainder = divmod(remaining - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def to_address(row: int, col: int) -> str:
    """Convert 1-based coordinates to an address such as ``B12``.

    Raises:
        InvalidCoordinateError: If either coordinate is below 1.
    """
    if row < 1 or col < 1:
        raise InvalidCoordinateError(row, col)
    return f"{column_letters(col)}{row}"


def from_address(address: str) -> tuple[int, int]:
    """Parse an address such as ``AA3`` into ``(row, col)``.

    Raises:
        InvalidAddressError: If the string is not ``[A-Z]+[0-9]+`` or
            names row 0.
    """
    match = _ADDRESS_RE.fullmatch(address)
    if not match:
        raise InvalidAddressError(address)

    letters, digits = match.groups()
    row = int(digits)
    if row < 1:
        raise InvalidAddressError(address, {"reason": "row must be at least 1"})

    col = 0
    for letter in letters:
        col = col * 26 + (ord(letter) - ord("A") + 1)
    return row, col


@dataclass(frozen=True)
class CellBounds:
    """Inclusive rectangle of cells, 1-based."""

    start_row: int
    start_col: int
    end_row: int
    end_col: int

    def __post_init__(self) -> None:
        if self.start_row < 1 or self.start_col < 1:
            raise InvalidCoordinateError(self.start_row, self.start_col)
        if self.end_row < self.start_row or self.end_col < self.start_col:
            raise InvalidRangeError(
                f"Range end ({self.end_row}, {self.end_col}) precedes "
                f"start ({self.start_row}, {self.start_col})",
                {
                    "start_row": self.start_row,
                    "start_col": self.start_col,
                    "end_row": self.end_row,
                    "end_col": self.end_col,
                },
            )

    @property
    def height(self) -> int:
        return self.end_row - self.start_row + 1

    @property
    def width(self) -> int:
        return self.end_col - self.start_col + 1

    def contains(self, row: int, col: int) -> bool:
        """Whether the cell at ``(row, col)`` lies inside the rectangle."""
        return (
            self.start_row <= row <= self.end_row
            and self.start_col <= col <= self.end_col
        )

    def encloses(self, other: CellBounds) -> bool:
        """Whether ``other`` lies entirely inside this rectangle."""
        return (
            other.start_row >= self.start_row
            and other.end_row <= self.end_row
            and other.start_col >= self.start_col
            and other.end_col <= self.end_col
        )

    def to_range(self) -> str:
        """Render as ``A1:C3``; a single cell still gets both halves."""
        start = to_address(self.start_row, self.start_col)
        end = to_address(self.end_row, self.end_col)
        return f"{start}:{end}"


def parse_range(ref: str) -> CellBounds:
    """Parse ``A1:C3`` (or a lone ``B2``) into :class:`CellBounds`.

    The second half is optional; a single reference yields a 1x1 rectangle.
    """
    start_ref, _, end_ref = ref.partition(":")
    start_row, start_col = from_address(start_ref)
    end_row, end_col = from_address(end_ref) if end_ref else (start_row, start_col)
    return CellBounds(start_row, start_col, end_row, end_col)
