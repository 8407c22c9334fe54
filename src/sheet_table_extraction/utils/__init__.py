"""Utilities package for sheet table extraction.

This package provides:
- Centralized exception classes (exceptions.py)
- Structured logging utilities (logging.py)
- A1 address conversion (coordinates.py)
- Markdown table rendering (markdown.py)
"""

from sheet_table_extraction.utils.exceptions import (
    CoordinateError,
    ErrorCode,
    ExtractionError,
    InvalidAddressError,
    InvalidCoordinateError,
    STEError,
    WorkbookError,
)
from sheet_table_extraction.utils.logging import (
    LogContext,
    StructuredLogger,
    get_logger,
)

__all__ = [
    # Exceptions
    "CoordinateError",
    "ErrorCode",
    "ExtractionError",
    "InvalidAddressError",
    "InvalidCoordinateError",
    "STEError",
    "WorkbookError",
    # Logging
    "LogContext",
    "StructuredLogger",
    "get_logger",
]
