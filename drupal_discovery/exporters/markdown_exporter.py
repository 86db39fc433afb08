"""Markdown table rendering."""

from typing import Any, List, Mapping, Sequence, Union

from rich.cells import cell_len

from ..models.discovery_models import ReportTable

Rows = Union[ReportTable, Sequence[Mapping[str, Any]]]


def _as_table(rows: Rows) -> ReportTable:
    if isinstance(rows, ReportTable):
        return rows
    return ReportTable.from_records(rows)


def _pad(text: str, width: int) -> str:
    return text + " " * (width - cell_len(text))


def column_widths(table: ReportTable) -> List[int]:
    """Widest of the heading and every cell, per column, in terminal cells."""
    widths = [cell_len(title) for title in table.heading]
    for row in table.rows:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], cell_len(cell))
    return widths


def to_table(rows: Rows) -> str:
    """Render uniform records as a pipe-delimited markdown table.

    Args:
        rows: Report table or non-empty sequence of same-shaped mappings

    Returns:
        Markdown table, one line per row, each ending in a newline

    Raises:
        EmptyResultSetError: If there are no rows
    """
    table = _as_table(rows)
    widths = column_widths(table)

    lines = [
        "| " + " | ".join(_pad(title, width) for title, width in zip(table.heading, widths)) + " |",
        "|" + "|".join("-" * (width + 2) for width in widths) + "|",
    ]
    for row in table.rows:
        lines.append("| " + " | ".join(_pad(cell, width) for cell, width in zip(row, widths)) + " |")

    return "\n".join(lines) + "\n"
