"""Markdown table rendering."""

from __future__ import annotations

from collections.abc import Sequence

_MISSING_CELL = " "


def render_markdown(rows: Sequence[Sequence[str]]) -> str:
    """Render display strings as a pipe-delimited markdown table.

    The first row is the header and fixes the separator width. Rows shorter
    than the header are padded with single spaces; longer rows are printed
    in full rather than truncated. Empty cells also print as a single space.

    Args:
        rows: Rows of display strings, header first.

    Returns:
        The markdown block, or an empty string when there are no rows.
    """
    if not rows:
        return ""

    column_count = len(rows[0])
    lines = [
        _render_line(rows[0], column_count),
        "| " + " | ".join("---" for _ in range(column_count)) + " |",
    ]
    lines.extend(_render_line(row, column_count) for row in rows[1:])
    return "\n".join(lines)


def _render_line(row: Sequence[str], column_count: int) -> str:
    cells = [cell or _MISSING_CELL for cell in row]
    if len(cells) < column_count:
        cells.extend(_MISSING_CELL for _ in range(column_count - len(cells)))
    return "| " + " | ".join(cells) + " |"
