"""Table extraction from a decoded sheet.

Composes the pipeline for one sheet: detect the table region, materialize its
cells, keep the merges inside it, render markdown and, on request, project
the rows to JSON.
"""

from __future__ import annotations

from collections.abc import Iterable

from sheet_table_extraction.cell_grid import CellGrid
from sheet_table_extraction.models import (
    ExtractionOptions,
    MergeRange,
    Table,
    TableRegion,
)
from sheet_table_extraction.services.header_hierarchy import has_hierarchical_headers
from sheet_table_extraction.services.merge_registry import MergeRangeRegistry
from sheet_table_extraction.services.region_detector import detect_table_regions
from sheet_table_extraction.services.row_projector import convert_table_to_json
from sheet_table_extraction.utils.exceptions import TableExtractionError
from sheet_table_extraction.utils.logging import get_logger
from sheet_table_extraction.utils.markdown import render_markdown

logger = get_logger(__name__)


def extract_tables(
    grid: CellGrid,
    merges: Iterable[MergeRange] | MergeRangeRegistry,
    options: ExtractionOptions | None = None,
) -> list[Table]:
    """Extract every table region of a sheet.

    A region that fails to build is logged and skipped so the rest of the
    workbook is still returned.

    Args:
        grid: Classified cells of the sheet.
        merges: All merge ranges declared on the sheet.
        options: Extraction options; JSON projection is off by default.

    Returns:
        One :class:`Table` per detected region, in detection order.
    """
    opts = options or ExtractionOptions()
    if isinstance(merges, MergeRangeRegistry):
        registry = merges
    else:
        registry = MergeRangeRegistry(merges)

    tables: list[Table] = []
    for region in detect_table_regions(grid):
        try:
            tables.append(extract_table(grid, region, registry, opts))
        except Exception as e:
            logger.error(
                "Skipping table region",
                exc_info=True,
                region=region.name,
                error=f"{type(e).__name__}: {e}",
                error_type=type(e).__name__,
            )
    return tables


def extract_table(
    grid: CellGrid,
    region: TableRegion,
    registry: MergeRangeRegistry,
    options: ExtractionOptions,
) -> Table:
    """Build a single :class:`Table` for ``region``."""
    bounds = region.bounds
    cells = grid.extract(bounds)
    if not cells or not cells[0]:
        raise TableExtractionError("Region produced no cells", region.name)

    table_merges = registry.within(bounds)
    display_rows = [[cell.display for cell in row] for row in cells]
    hierarchical = has_hierarchical_headers(table_merges.merges, bounds.start_row)

    json_rows = None
    if options.convert_to_json:
        json_rows = tuple(convert_table_to_json(cells, table_merges, hierarchical))

    table = Table(
        name=region.name,
        range=bounds.to_range(),
        column_labels=tuple(display_rows[0]),
        grid=tuple(tuple(row) for row in cells),
        merges=table_merges.merges,
        has_hierarchical_headers=hierarchical,
        markdown=render_markdown(display_rows),
        json=json_rows,
    )
    logger.log_table_result(
        table.name,
        table.range,
        rows=table.row_count,
        hierarchical=hierarchical,
        json_rows=len(json_rows) if json_rows is not None else None,
    )
    return table
