"""Projection of table rows into flat or nested JSON-ready mappings."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pandas as pd

from sheet_table_extraction.models import Cell, HeaderNode, Table, native_value
from sheet_table_extraction.services.header_hierarchy import (
    HeaderHierarchy,
    build_header_hierarchy,
)
from sheet_table_extraction.services.merge_registry import MergeRangeRegistry

RowMapping = dict[str, Any]


def flat_header_labels(header_row: Sequence[Cell]) -> list[str]:
    """Labels of a single header row; blank cells become ``ColumnN``.

    ``N`` is the cell's sheet column number.
    """
    return [cell.display or f"Column{cell.col}" for cell in header_row]


def convert_flat_table(grid: Sequence[Sequence[Cell]]) -> list[RowMapping]:
    """Map each row after the first onto the first row's labels.

    Tables with fewer than two rows have no data and yield an empty list.
    Duplicate labels keep the right-most column's value.
    """
    if len(grid) < 2:
        return []

    headers = flat_header_labels(grid[0])
    rows: list[RowMapping] = []
    for row in grid[1:]:
        mapping: RowMapping = {}
        for index, cell in enumerate(row):
            label = headers[index] if index < len(headers) else f"Column{index + 1}"
            mapping[label] = native_value(cell.value)
        rows.append(mapping)
    return rows


def project_row(row: Sequence[Cell], nodes: Sequence[HeaderNode]) -> RowMapping:
    """Nest one data row following each column's header path.

    Columns sharing a path prefix share the nested mapping; identical full
    paths resolve to the later column's value.
    """
    mapping: RowMapping = {}
    for cell, node in zip(row, nodes):
        current = mapping
        for key in node.path[:-1]:
            child = current.get(key)
            if not isinstance(child, dict):
                child = {}
                current[key] = child
            current = child
        current[node.final_header] = native_value(cell.value)
    return mapping


def convert_nested_table(
    grid: Sequence[Sequence[Cell]],
    registry: MergeRangeRegistry,
    hierarchy: HeaderHierarchy | None = None,
) -> list[RowMapping]:
    """Project every row below the inferred header into a nested mapping."""
    if len(grid) < 2:
        return []

    hierarchy = hierarchy or build_header_hierarchy(grid, registry)
    return [project_row(row, hierarchy.nodes) for row in grid[hierarchy.depth :]]


def convert_table_to_json(
    grid: Sequence[Sequence[Cell]],
    registry: MergeRangeRegistry,
    hierarchical: bool,
) -> list[RowMapping]:
    """Choose the flat or nested projection for a table."""
    if not hierarchical or len(registry) == 0:
        return convert_flat_table(grid)
    return convert_nested_table(grid, registry)


def table_to_dataframe(table: Table) -> pd.DataFrame:
    """Build a DataFrame of a table's data rows.

    Nested header paths are joined with `` / `` into a single column name.
    """
    grid = table.grid
    if len(grid) < 2:
        return pd.DataFrame()

    if table.has_hierarchical_headers and table.merges:
        hierarchy = build_header_hierarchy(grid, MergeRangeRegistry(table.merges))
        columns = [" / ".join(node.path) for node in hierarchy.nodes]
        body = grid[hierarchy.depth :]
    else:
        columns = flat_header_labels(grid[0])
        body = grid[1:]

    records = [[native_value(cell.value) for cell in row] for row in body]
    return pd.DataFrame(records, columns=columns)
