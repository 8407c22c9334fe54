from __future__ import annotations

import pytest

from sheet_table_extraction.cell_grid import CellGrid
from sheet_table_extraction.models import MergeRange
from tests.fixtures import make_merge


@pytest.fixture
def regional_grid() -> CellGrid:
    """Two header rows over one data row: Region > Q1/Q2 plus Total."""
    return CellGrid.from_rows(
        [
            ["Region", "Region", "Total"],
            ["Q1", "Q2", "Total"],
            [100, 200, 300],
        ]
    )


@pytest.fixture
def regional_merges() -> list[MergeRange]:
    return [make_merge("A1:B1", "Region"), make_merge("B2:C2", "Q2")]


@pytest.fixture
def flat_grid() -> CellGrid:
    return CellGrid.from_rows(
        [
            ["Name", "Amount", "Active"],
            ["Alice", 123.45, True],
            ["Bob", 10, False],
        ]
    )


@pytest.fixture
def sales_grid() -> CellGrid:
    """Sales table with a two-level header merged across column pairs."""
    return CellGrid.from_rows(
        [
            ["Store", "2023", None, "2024", None],
            [None, "Units", "Revenue", "Units", "Revenue"],
            ["North", 10, 100.5, 12, 130],
            ["South", 7, 70, 9, 95.25],
        ]
    )


@pytest.fixture
def sales_merges() -> list[MergeRange]:
    return [
        make_merge("A1:A2", "Store"),
        make_merge("B1:C1", "2023"),
        make_merge("D1:E1", "2024"),
    ]
