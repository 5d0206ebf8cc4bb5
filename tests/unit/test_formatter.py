"""Unit tests for TSV/CSV row formatting."""

import csv
from io import StringIO

import pytest

from bundleresolver.config import OutputConfig
from bundleresolver.formatter import RowFormatter
from bundleresolver.models import Field, Record

ALL_FIELDS = (Field.BUNDLE, Field.NAME, Field.PUBLISHER, Field.URL)


def _formatter(output_format: str, fields=ALL_FIELDS) -> RowFormatter:
    return RowFormatter(OutputConfig(fields=fields, output_format=output_format))


class TestTSV:
    """Test tab-delimited rows."""

    def test_header(self):
        assert _formatter("tsv").header() == "bundle\tname\tpublisher\turl\n"

    def test_row_follows_field_order(self):
        record = Record(bundle="1", name="App", publisher="Dev", url="https://x")
        formatter = _formatter("tsv", fields=(Field.URL, Field.NAME))
        assert formatter.row(record) == "https://x\tApp\n"

    def test_tabs_and_newlines_collapse_to_space(self):
        record = Record(name="My\tApp", publisher="Big\nDev")
        row = _formatter("tsv", fields=(Field.NAME, Field.PUBLISHER)).row(record)
        assert row == "My App\tBig Dev\n"

    def test_no_quoting(self):
        record = Record(name='Say "hi", ok')
        assert _formatter("tsv", fields=(Field.NAME,)).row(record) == 'Say "hi", ok\n'

    def test_empty_row_has_one_column_per_field(self):
        row = _formatter("tsv").empty_row()
        assert row == "\t\t\t\n"
        assert len(row.rstrip("\n").split("\t")) == len(ALL_FIELDS)


class TestCSV:
    """Test comma-delimited rows with RFC 4180 quoting."""

    def test_header(self):
        assert _formatter("csv").header() == "bundle,name,publisher,url\n"

    def test_value_with_comma_is_quoted(self):
        record = Record(bundle="123", name="My,App", publisher="Dev", url="https://example.com/app")
        assert _formatter("csv").row(record) == '123,"My,App",Dev,https://example.com/app\n'

    def test_value_with_quote_is_doubled(self):
        record = Record(name='The "Best" App')
        row = _formatter("csv", fields=(Field.NAME, Field.URL)).row(record)
        assert row == '"The ""Best"" App",\n'

    def test_values_are_sanitized(self):
        record = Record(name="My\nApp")
        assert _formatter("csv", fields=(Field.NAME, Field.URL)).row(record) == "My App,\n"

    @pytest.mark.parametrize("fields", [ALL_FIELDS, (Field.NAME, Field.URL), (Field.URL, Field.BUNDLE, Field.NAME)])
    def test_column_count_matches_fields(self, fields):
        record = Record(bundle="a,b", name='"q"', publisher="", url="u")
        row = _formatter("csv", fields=fields).row(record)
        parsed = next(csv.reader(StringIO(row)))
        assert len(parsed) == len(fields)
