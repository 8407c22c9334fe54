"""Services for sheet table extraction."""

from sheet_table_extraction.services.merge_registry import MergeRangeRegistry
from sheet_table_extraction.services.table_extractor import extract_tables

__all__ = ["MergeRangeRegistry", "extract_tables"]
