"""Sheet Table Extraction - tables, nested headers and markdown from spreadsheets."""

from sheet_table_extraction.models import ExtractionOptions, Table
from sheet_table_extraction.services.table_extractor import extract_tables
from sheet_table_extraction.services.workbook_loader import (
    WorkbookLoader,
    WorkbookParseOptions,
)
from sheet_table_extraction.utils.markdown import render_markdown

__all__ = [
    "ExtractionOptions",
    "Table",
    "WorkbookLoader",
    "WorkbookParseOptions",
    "extract_tables",
    "render_markdown",
]
__version__ = "0.1.0"
