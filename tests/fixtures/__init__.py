"""Test helpers for building merges and on-disk workbooks.

Example usage:
    from tests.fixtures import make_merge, save_workbook

    merge = make_merge("A1:C1", "Quarter")
    path = save_workbook(workbook, tmp_path)
"""

from pathlib import Path

from openpyxl import Workbook

from sheet_table_extraction.cell_grid import classify_value
from sheet_table_extraction.models import MergeRange
from sheet_table_extraction.utils.coordinates import parse_range


def make_merge(ref: str, anchor: object = None) -> MergeRange:
    """Build a merge over ``ref``, classifying ``anchor`` as the loader does.

    Without an anchor the merge carries an Empty value.
    """
    return MergeRange(bounds=parse_range(ref), anchor_value=classify_value(anchor))


def save_workbook(workbook: Workbook, directory: Path, name: str = "book.xlsx") -> Path:
    """Save ``workbook`` under ``directory`` and return the file path."""
    path = directory / name
    workbook.save(path)
    return path
