"""Centralized exception classes for sheet table extraction.

This module provides a hierarchy of custom exceptions with error codes
and structured error details for consistent error handling throughout
the package.

Exception Hierarchy:
    STEError (base)
    ├── CoordinateError
    │   ├── InvalidAddressError
    │   ├── InvalidCoordinateError
    │   └── InvalidRangeError
    ├── WorkbookError
    │   ├── WorkbookNotFoundError
    │   ├── FileTooLargeError
    │   ├── TooManySheetsError
    │   ├── UnsupportedFormatError
    │   └── WorkbookParseError
    └── ExtractionError
        └── TableExtractionError

Error Codes:
    All errors have a unique error code (e.g., "E1001") that can be used
    for programmatic error handling and documentation.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Enumeration of all error codes used in the package.

    Error codes are grouped by category:
    - E1xxx: Coordinate/address errors
    - E2xxx: Workbook/file errors
    - E3xxx: Extraction errors
    - E9xxx: Internal/unexpected errors
    """

    # Coordinate errors (E1xxx)
    INVALID_ADDRESS = "E1001"
    INVALID_COORDINATE = "E1002"
    INVALID_RANGE = "E1003"

    # Workbook errors (E2xxx)
    WORKBOOK_NOT_FOUND = "E2001"
    FILE_TOO_LARGE = "E2002"
    TOO_MANY_SHEETS = "E2003"
    UNSUPPORTED_FORMAT = "E2004"
    WORKBOOK_PARSE_FAILED = "E2005"

    # Extraction errors (E3xxx)
    EXTRACTION_FAILED = "E3001"
    TABLE_EXTRACTION_FAILED = "E3002"

    # Internal errors (E9xxx)
    INTERNAL_ERROR = "E9001"


class STEError(Exception):
    """Base exception for all sheet table extraction errors.

    Attributes:
        message: Human-readable error message.
        error_code: Unique error code from ErrorCode enum.
        details: Optional dictionary with additional error details.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Error code from ErrorCode enum.
            details: Optional additional details about the error.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert the exception to a dictionary.

        Returns:
            Dictionary with error information.
        """
        result: dict[str, Any] = {
            "error_code": self.error_code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code.value}] {self.message}"


# =============================================================================
# Coordinate Errors (E1xxx)
# =============================================================================


class CoordinateError(STEError, ValueError):
    """Base class for malformed addresses, coordinates and ranges."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INVALID_COORDINATE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)


class InvalidAddressError(CoordinateError):
    """Raised when an address string does not look like ``A1``."""

    def __init__(self, address: str, details: dict[str, Any] | None = None) -> None:
        """Initialize with the offending address.

        Args:
            address: The address string that failed to parse.
            details: Additional details.
        """
        details = details or {}
        details["address"] = address
        super().__init__(
            f"Invalid cell address: {address!r}",
            ErrorCode.INVALID_ADDRESS,
            details,
        )
        self.address = address


class InvalidCoordinateError(CoordinateError):
    """Raised when a row or column number is not a positive integer."""

    def __init__(
        self,
        row: int,
        col: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the offending coordinates.

        Args:
            row: Row number that was passed.
            col: Column number that was passed.
            details: Additional details.
        """
        details = details or {}
        details["row"] = row
        details["col"] = col
        super().__init__(
            f"Invalid cell coordinates: row={row}, col={col}",
            ErrorCode.INVALID_COORDINATE,
            details,
        )
        self.row = row
        self.col = col


class InvalidRangeError(CoordinateError):
    """Raised when range bounds are inverted."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, ErrorCode.INVALID_RANGE, details)


# =============================================================================
# Workbook Errors (E2xxx)
# =============================================================================


class WorkbookError(STEError):
    """Base class for workbook file errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.WORKBOOK_PARSE_FAILED,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with file path information.

        Args:
            message: Error message.
            error_code: Error code.
            file_path: Path to the problematic workbook.
            details: Additional details.
        """
        details = details or {}
        if file_path:
            details["file_path"] = file_path
        super().__init__(message, error_code, details)
        self.file_path = file_path


class WorkbookNotFoundError(WorkbookError):
    """Raised when a workbook path does not exist."""

    def __init__(self, file_path: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            f"Workbook not found: {file_path}",
            ErrorCode.WORKBOOK_NOT_FOUND,
            file_path=file_path,
            details=details,
        )


class FileTooLargeError(WorkbookError):
    """Raised when a workbook exceeds the configured size limit."""

    def __init__(
        self,
        file_size: int,
        max_size: int,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with size information.

        Args:
            file_size: Actual file size in bytes.
            max_size: Maximum allowed size in bytes.
            file_path: Optional file path.
            details: Additional details.
        """
        details = details or {}
        details["file_size_bytes"] = file_size
        details["max_size_bytes"] = max_size
        super().__init__(
            f"File size ({file_size} bytes) exceeds maximum "
            f"allowed size ({max_size} bytes)",
            ErrorCode.FILE_TOO_LARGE,
            file_path=file_path,
            details=details,
        )
        self.file_size = file_size
        self.max_size = max_size


class TooManySheetsError(WorkbookError):
    """Raised when a workbook has more sheets than allowed."""

    def __init__(
        self,
        sheet_count: int,
        max_sheets: int,
        file_path: str | None = None,
    ) -> None:
        super().__init__(
            f"Workbook has {sheet_count} sheets, maximum is {max_sheets}",
            ErrorCode.TOO_MANY_SHEETS,
            file_path=file_path,
            details={"sheet_count": sheet_count, "max_sheets": max_sheets},
        )
        self.sheet_count = sheet_count
        self.max_sheets = max_sheets


class UnsupportedFormatError(WorkbookError):
    """Raised when the file extension is not a supported workbook type."""

    def __init__(
        self,
        extension: str,
        file_path: str | None = None,
    ) -> None:
        super().__init__(
            f"Unsupported workbook format: {extension or '(none)'}",
            ErrorCode.UNSUPPORTED_FORMAT,
            file_path=file_path,
            details={"extension": extension},
        )
        self.extension = extension


class WorkbookParseError(WorkbookError):
    """Raised when openpyxl cannot read the workbook."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"Failed to parse workbook: {message}",
            ErrorCode.WORKBOOK_PARSE_FAILED,
            file_path=file_path,
            details=details,
        )


# =============================================================================
# Extraction Errors (E3xxx)
# =============================================================================


class ExtractionError(STEError):
    """Base class for table extraction errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.EXTRACTION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)


class TableExtractionError(ExtractionError):
    """Raised when a single table region cannot be built."""

    def __init__(
        self,
        message: str,
        region_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with region information.

        Args:
            message: Error message.
            region_name: Name of the region that failed.
            details: Additional details.
        """
        details = details or {}
        if region_name:
            details["region"] = region_name
        super().__init__(message, ErrorCode.TABLE_EXTRACTION_FAILED, details)
        self.region_name = region_name

