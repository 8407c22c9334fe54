"""Inference of multi-level column headers from merge geometry.

Spreadsheets only express header nesting through merged cells: a label
merged across several columns is the parent of the labels beneath it. This
module works in two stages:

1. Header depth. Merges spanning more than one column and anchored within
   the first three rows of the table are header candidates. The lowest row
   any candidate reaches fixes the number of header rows. Merges spanning a
   single column never deepen the header, and at least one data row is
   always kept.
2. Header paths. For every column, each header row contributes one label:
   the anchor value of the merge covering that cell if there is one,
   otherwise the cell's own value. Blank labels stay as empty strings.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sheet_table_extraction.models import Cell, HeaderNode, MergeRange, display_text
from sheet_table_extraction.services.merge_registry import MergeRangeRegistry

# Merges anchored this many rows below the table top still count as headers.
HEADER_SEARCH_ROWS = 3


def is_header_candidate(merge: MergeRange, first_row: int) -> bool:
    """Whether ``merge`` may form part of a table's column header."""
    return (
        merge.col_span > 1
        and merge.bounds.start_row <= first_row + HEADER_SEARCH_ROWS - 1
    )


def has_hierarchical_headers(merges: Sequence[MergeRange], first_row: int) -> bool:
    return any(is_header_candidate(merge, first_row) for merge in merges)


def detect_header_depth(
    merges: Sequence[MergeRange],
    first_row: int,
    total_rows: int,
) -> int:
    """Number of leading table rows that are headers.

    Args:
        merges: Merges contained in the table.
        first_row: Absolute sheet row of the table's top edge.
        total_rows: Number of rows in the table, headers included.

    Returns:
        A depth of at least 1, and below ``total_rows`` whenever the table
        has two or more rows.
    """
    depth = 1
    candidate_ends = [
        merge.bounds.end_row
        for merge in merges
        if is_header_candidate(merge, first_row)
    ]
    if candidate_ends:
        deepest = max(candidate_ends)
        if deepest > first_row:
            depth = deepest - first_row + 1
    return max(1, min(depth, total_rows - 1))


def build_header_node(
    col: int,
    grid: Sequence[Sequence[Cell]],
    registry: MergeRangeRegistry,
    depth: int,
) -> HeaderNode:
    """Build the label path of the sheet column ``col``."""
    first_row = grid[0][0].row
    first_col = grid[0][0].col
    path: list[str] = []
    for level in range(depth):
        row = first_row + level
        merge = registry.merge_at(row, col)
        if merge is not None:
            path.append(display_text(merge.anchor_value))
            continue
        row_cells = grid[level]
        offset = col - first_col
        in_row = 0 <= offset < len(row_cells)
        path.append(row_cells[offset].display if in_row else "")
    return HeaderNode(column=col, path=tuple(path))


@dataclass(frozen=True)
class HeaderHierarchy:
    """Header depth of a table plus one label path per column."""

    depth: int
    nodes: tuple[HeaderNode, ...]

    @property
    def final_headers(self) -> list[str]:
        return [node.final_header for node in self.nodes]


def build_header_hierarchy(
    grid: Sequence[Sequence[Cell]],
    registry: MergeRangeRegistry,
) -> HeaderHierarchy:
    """Infer the header depth of ``grid`` and the path of every column.

    Args:
        grid: Rectangular table cells, top row first.
        registry: Merges contained in the table.

    Returns:
        The hierarchy; an empty grid yields depth 1 and no nodes.
    """
    if not grid or not grid[0]:
        return HeaderHierarchy(depth=1, nodes=())

    first_row = grid[0][0].row
    depth = detect_header_depth(registry.merges, first_row, len(grid))
    nodes = tuple(
        build_header_node(cell.col, grid, registry, depth) for cell in grid[0]
    )
    return HeaderHierarchy(depth=depth, nodes=nodes)
