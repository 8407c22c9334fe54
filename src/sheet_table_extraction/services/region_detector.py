"""Detection of the tabular region within a cell grid."""

from __future__ import annotations

from sheet_table_extraction.cell_grid import CellGrid
from sheet_table_extraction.models import TableRegion

DEFAULT_TABLE_NAME = "Table1"


def detect_table_regions(grid: CellGrid) -> list[TableRegion]:
    """Return the table regions of a sheet.

    Currently the whole occupied area is treated as a single table, so the
    result holds at most one region. Empty sheets yield no regions.
    """
    bounds = grid.occupied_bounds()
    if bounds is None:
        return []
    return [TableRegion(name=DEFAULT_TABLE_NAME, bounds=bounds)]
