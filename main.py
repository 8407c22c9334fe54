import json
import sys
from pathlib import Path

from sheet_table_extraction.config import settings, validate_settings_on_startup
from sheet_table_extraction.models import display_text
from sheet_table_extraction.services.workbook_loader import (
    WorkbookLoader,
    WorkbookParseOptions,
)
from sheet_table_extraction.utils.exceptions import STEError
from sheet_table_extraction.utils.logging import configure_logging

USAGE = (
    "Usage: python main.py <path/to/workbook.xlsx> [--json] [--sheet NAME] [--parallel]"
)


def run(workbook_path: str, convert_to_json: bool, sheet: str | None, parallel: bool):
    loader = WorkbookLoader()
    document = loader.load_from_path(
        Path(workbook_path),
        WorkbookParseOptions(
            sheet_name=sheet,
            convert_to_json=convert_to_json,
            parallel=parallel,
        ),
    )

    print(f"Total sheets: {len(document.sheets)}\n")
    for sheet_doc in document.sheets:
        print(f"=== Sheet {sheet_doc.index + 1}: {sheet_doc.name} ===")
        print(f"Tables: {len(sheet_doc.tables)}")
        print(f"Merged cells: {len(sheet_doc.merged_cells)}")
        for merge in sheet_doc.merged_cells:
            anchor = display_text(merge.anchor_value)
            print(f"  {merge.ref}: \"{anchor}\" ({merge.col_span}x{merge.row_span})")

        for idx, table in enumerate(sheet_doc.tables, start=1):
            print(f"\n--- Table {idx}: {table.name} ---")
            print(f"Range: {table.range}")
            print(f"Columns: {', '.join(table.column_labels)}")
            print(f"Rows: {table.row_count}")
            print(f"Has hierarchical headers: {table.has_hierarchical_headers}")
            print("\nMarkdown:")
            print(table.markdown)
            if table.json is not None:
                print("\nJSON:")
                print(json.dumps(table.to_dict()["json"], indent=2))
        print("")


def parse_args(argv: list[str]) -> tuple[str, bool, str | None, bool]:
    args = list(argv)
    convert_to_json = "--json" in args
    parallel = "--parallel" in args
    sheet = None
    if "--sheet" in args:
        position = args.index("--sheet")
        if position + 1 >= len(args):
            raise ValueError("--sheet requires a sheet name")
        sheet = args[position + 1]
        del args[position : position + 2]
    positional = [arg for arg in args if not arg.startswith("--")]
    if len(positional) != 1:
        raise ValueError("expected exactly one workbook path")
    return positional[0], convert_to_json, sheet, parallel


if __name__ == "__main__":
    try:
        workbook_path, convert_to_json, sheet, parallel = parse_args(sys.argv[1:])
    except ValueError as exc:
        print(f"Error: {exc}")
        print(USAGE)
        sys.exit(1)

    configure_logging(settings.log_level_int)
    validate_settings_on_startup(settings)
    try:
        run(workbook_path, convert_to_json, sheet, parallel)
    except STEError as exc:
        print(f"Error: {exc}")
        sys.exit(1)
