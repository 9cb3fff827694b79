"""CSV export of key-value pairs and tables."""

from __future__ import annotations

import csv
import io

from reporting.formatters.base import BaseFormatter
from schemas.internal.documents import NormalizedDocument, Table


class CSVFormatter(BaseFormatter):
    """Key-value pairs as ``Key,Value,Confidence`` rows.

    Tables are appended after a blank line, one block per table, when
    ``include_tables`` is set.
    """

    name = "csv"
    media_type = "text/csv"
    extension = ".csv"

    def __init__(self, *, include_tables: bool = False) -> None:
        self.include_tables = include_tables

    def format(self, document: NormalizedDocument) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(["Key", "Value", "Confidence"])
        for pair in document.key_value_pairs:
            writer.writerow([pair.key, pair.value, pair.confidence])
        if self.include_tables:
            for table in document.tables:
                buffer.write("\n")
                writer.writerow([f"Table {table.id}"])
                _write_table(writer, table)
        return buffer.getvalue()


def table_to_csv(table: Table) -> str:
    """Render one table's rows, header row first."""
    buffer = io.StringIO()
    _write_table(csv.writer(buffer, lineterminator="\n"), table)
    return buffer.getvalue()


def _write_table(writer, table: Table) -> None:
    for row in table.rows:
        writer.writerow(row.cells)
