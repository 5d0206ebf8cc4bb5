"""Row formatting for TSV and CSV output."""

import csv
from io import StringIO
from typing import Iterable

from .config import OutputConfig
from .models import Record
from .sanitizer import sanitize


class RowFormatter:
    """Render records as delimited rows for a fixed field selection.

    TSV rows are joined with tabs and never quoted; sanitization already
    collapses tabs and newlines inside values. CSV rows use RFC 4180
    quoting.
    """

    def __init__(self, config: OutputConfig):
        self.config = config

    def header(self) -> str:
        """Render the header row."""
        return self._render(field.value for field in self.config.fields)

    def row(self, record: Record) -> str:
        """Render one record as a row with one column per selected field."""
        return self._render(sanitize(record.get(field)) for field in self.config.fields)

    def empty_row(self) -> str:
        """Render a row with every field empty."""
        return self.row(Record())

    def _render(self, values: Iterable[str]) -> str:
        if self.config.output_format == "csv":
            output = StringIO()
            writer = csv.writer(output, lineterminator="\n")
            writer.writerow(list(values))
            return output.getvalue()
        return "\t".join(v.replace("\t", " ") for v in values) + "\n"
