"""Workbook loading with openpyxl.

Decodes every worksheet into a :class:`CellGrid` plus its merge ranges and
hands both to :func:`extract_tables`. Decoding runs sheet by sheet on the
calling thread; with ``parallel`` set, the table extraction of each decoded
sheet is fanned out to a bounded thread pool.
"""

from __future__ import annotations

import zipfile
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl import load_workbook
from openpyxl.cell import Cell as OpenpyxlCell
from openpyxl.styles.numbers import is_date_format
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from sheet_table_extraction.cell_grid import CellGrid, classify_value
from sheet_table_extraction.config import Settings, settings
from sheet_table_extraction.models import (
    EMPTY,
    CellValue,
    ExtractionOptions,
    FormulaValue,
    MergeRange,
)
from sheet_table_extraction.services.merge_registry import MergeRangeRegistry
from sheet_table_extraction.services.row_projector import table_to_dataframe
from sheet_table_extraction.services.table_extractor import extract_tables
from sheet_table_extraction.utils.coordinates import parse_range
from sheet_table_extraction.utils.exceptions import (
    FileTooLargeError,
    TooManySheetsError,
    UnsupportedFormatError,
    WorkbookNotFoundError,
    WorkbookParseError,
)
from sheet_table_extraction.utils.logging import (
    LogContext,
    ProgressTracker,
    get_logger,
    timed_operation,
)
from sheet_table_extraction.workbook_document import Sheet, WorkbookDocument

logger = get_logger(__name__)

SUPPORTED_EXTENSIONS = frozenset({".xlsx", ".xlsm", ".xltx", ".xltm"})


@dataclass
class WorkbookParseOptions:
    """Options controlling workbook extraction."""

    sheet_name: str | None = None
    convert_to_json: bool | None = None
    parallel: bool = False


@dataclass
class DecodedSheet:
    """A worksheet decoded into classified cells and merges."""

    name: str
    index: int
    grid: CellGrid
    merges: list[MergeRange]


class WorkbookLoader:
    """Extract tables from workbooks using openpyxl."""

    def __init__(self, config: Settings | None = None) -> None:
        self._settings = config or settings

    def load_from_path(
        self,
        file_path: Path | str,
        options: WorkbookParseOptions | None = None,
    ) -> WorkbookDocument:
        """Extract the tables of every (or one selected) worksheet.

        Raises:
            WorkbookNotFoundError: If the path does not exist.
            UnsupportedFormatError: If the extension is not an OOXML workbook.
            FileTooLargeError: If the file exceeds the configured size.
            TooManySheetsError: If the workbook exceeds the sheet limit.
            WorkbookParseError: If openpyxl cannot read the file.
            ValueError: If ``options.sheet_name`` is not in the workbook.
        """
        path = Path(file_path)
        self._validate_file(path)

        opts = options or WorkbookParseOptions()
        convert_to_json = (
            self._settings.convert_to_json
            if opts.convert_to_json is None
            else opts.convert_to_json
        )
        extraction_options = ExtractionOptions(convert_to_json=convert_to_json)

        with LogContext(workbook=path.name), timed_operation(
            logger, "load_workbook"
        ) as metrics:
            sheet_names, decoded = self._decode_workbook(path, opts.sheet_name)

            if opts.parallel and len(decoded) > 1:
                sheets = self._extract_parallel(path.name, decoded, extraction_options)
            else:
                sheets = self._extract_sequential(decoded, extraction_options)

            metrics.sheets_processed = len(sheets)
            metrics.tables_extracted = sum(len(sheet.tables) for sheet in sheets)
            metrics.merges_indexed = sum(len(sheet.merged_cells) for sheet in sheets)
            metrics.rows_projected = sum(
                len(table.json or ()) for sheet in sheets for table in sheet.tables
            )

        metadata: dict[str, Any] = {
            "file_name": path.name,
            "sheet_names": sheet_names,
            "has_formulas": any(
                isinstance(value, FormulaValue)
                for item in decoded
                for value in item.grid.values()
            ),
        }
        return WorkbookDocument(sheets=sheets, metadata=metadata)

    def get_sheet_names(self, file_path: Path | str) -> list[str]:
        """List all sheet names in a workbook."""
        path = Path(file_path)
        self._validate_file(path)
        wb = self._open(path, data_only=True, read_only=True)
        try:
            return list(wb.sheetnames)
        finally:
            wb.close()

    def extract_as_dataframe(
        self, file_path: Path | str, sheet_name: str | None = None
    ) -> pd.DataFrame:
        """Extract the table of one worksheet as a pandas DataFrame.

        Defaults to the first sheet. Sheets without a table give an empty
        DataFrame.
        """
        target = sheet_name or self.get_sheet_names(file_path)[0]
        document = self.load_from_path(
            file_path,
            WorkbookParseOptions(sheet_name=target, convert_to_json=False),
        )
        tables = document.sheets[0].tables
        if not tables:
            return pd.DataFrame()
        return table_to_dataframe(tables[0])

    def decode_sheet(
        self,
        sheet: Worksheet,
        computed_sheet: Worksheet,
        index: int,
    ) -> DecodedSheet:
        """Classify the cells of a worksheet and collect its merges."""
        grid = CellGrid()
        row_iter = sheet.iter_rows()
        computed_iter = computed_sheet.iter_rows(values_only=True)
        for row_cells, computed_values in zip(row_iter, computed_iter, strict=True):
            for cell, computed_value in zip(row_cells, computed_values, strict=True):
                value = self._classify_cell(cell, computed_value)
                grid.set(cell.row, cell.column, value)

        # openpyxl keeps merged ranges in a set; register them top-left first.
        merged_ranges = sorted(
            sheet.merged_cells.ranges, key=lambda r: (r.min_row, r.min_col)
        )
        merges = []
        for merged_range in merged_ranges:
            bounds = parse_range(merged_range.coord)
            merges.append(
                MergeRange(
                    bounds=bounds,
                    anchor_value=self._anchor_value(
                        grid.get(bounds.start_row, bounds.start_col)
                    ),
                )
            )

        logger.debug(
            "Sheet decoded",
            sheet=sheet.title,
            cells=len(grid),
            merges=len(merges),
        )
        return DecodedSheet(name=sheet.title, index=index, grid=grid, merges=merges)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _validate_file(self, path: Path) -> None:
        if not path.exists():
            raise WorkbookNotFoundError(str(path))
        suffix = path.suffix.lower()
        if suffix not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFormatError(suffix, file_path=str(path))
        size = path.stat().st_size
        if size > self._settings.max_file_size_bytes:
            raise FileTooLargeError(
                size, self._settings.max_file_size_bytes, file_path=str(path)
            )

    def _decode_workbook(
        self, path: Path, sheet_name: str | None
    ) -> tuple[list[str], list[DecodedSheet]]:
        # Load twice: once for formula text, once for cached results
        workbook = self._open(path, data_only=False)
        try:
            sheet_names = list(workbook.sheetnames)
            if len(sheet_names) > self._settings.max_sheets:
                raise TooManySheetsError(
                    len(sheet_names), self._settings.max_sheets, str(path)
                )
            if sheet_name and sheet_name not in sheet_names:
                raise ValueError(f"Sheet '{sheet_name}' not found in workbook")

            computed_wb = self._open(path, data_only=True)
            try:
                decoded = [
                    self.decode_sheet(workbook[name], computed_wb[name], index)
                    for index, name in enumerate(sheet_names)
                    if sheet_name is None or name == sheet_name
                ]
            finally:
                computed_wb.close()
        finally:
            workbook.close()
        return sheet_names, decoded

    @staticmethod
    def _open(path: Path, *, data_only: bool, read_only: bool = False) -> Any:
        try:
            return load_workbook(
                filename=path, data_only=data_only, read_only=read_only
            )
        except (InvalidFileException, zipfile.BadZipFile, KeyError) as exc:
            raise WorkbookParseError(str(exc), file_path=str(path)) from exc

    @staticmethod
    def _classify_cell(cell: OpenpyxlCell, computed_value: Any) -> CellValue:
        """Classify a cell, pairing formula text with its cached result."""
        if cell.data_type != "f":
            return classify_value(cell.value)

        raw_formula = cell.value
        formula = getattr(raw_formula, "text", None) or str(raw_formula)
        numeric = isinstance(computed_value, (int, float)) and not isinstance(
            computed_value, bool
        )
        return classify_value(
            computed_value,
            formula=formula,
            is_date=numeric and is_date_format(cell.number_format),
        )

    @staticmethod
    def _anchor_value(value: CellValue) -> CellValue:
        if isinstance(value, FormulaValue):
            return value.result if value.result is not None else EMPTY
        return value

    def _extract_sheet(
        self, decoded: DecodedSheet, options: ExtractionOptions
    ) -> Sheet:
        registry = MergeRangeRegistry(decoded.merges)
        tables = extract_tables(decoded.grid, registry, options)
        return Sheet(
            name=decoded.name,
            index=decoded.index,
            tables=tables,
            merged_cells=decoded.merges,
        )

    def _extract_sequential(
        self, decoded: list[DecodedSheet], options: ExtractionOptions
    ) -> list[Sheet]:
        tracker = ProgressTracker(logger, "Extracting sheets", total=len(decoded))
        sheets = []
        for item in decoded:
            with LogContext(sheet=item.name):
                sheets.append(self._extract_sheet(item, options))
            tracker.update(details=item.name)
        tracker.complete()
        return sheets

    def _extract_parallel(
        self,
        workbook_name: str,
        decoded: list[DecodedSheet],
        options: ExtractionOptions,
    ) -> list[Sheet]:
        # Context variables do not follow work into pool threads.
        def run(item: DecodedSheet) -> Sheet:
            with LogContext(workbook=workbook_name, sheet=item.name):
                return self._extract_sheet(item, options)

        workers = min(self._settings.max_workers, len(decoded))
        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="sheet-extract"
        ) as executor:
            return list(executor.map(run, decoded))
