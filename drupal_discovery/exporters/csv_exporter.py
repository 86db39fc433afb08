"""CSV rendering of report rows."""

import csv
import io
from typing import Any, Mapping, Sequence, Union

from ..models.discovery_models import ReportTable


def to_csv(rows: Union[ReportTable, Sequence[Mapping[str, Any]]]) -> str:
    """Render uniform records as CSV.

    The header carries the raw keys; every data cell is quoted.

    Raises:
        EmptyResultSetError: If there are no rows
    """
    table = rows if isinstance(rows, ReportTable) else ReportTable.from_records(rows)

    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow(table.columns)

    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for row in table.rows:
        writer.writerow(row)

    return buffer.getvalue()
