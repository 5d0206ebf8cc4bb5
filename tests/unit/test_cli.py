"""Unit tests for the command-line interface."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from bundleresolver import __version__
from bundleresolver.cli import main
from bundleresolver.errors import UnrecognizedPlatformError
from bundleresolver.models import Record, ResolutionOutcome


def _fake_store_resolver(token: str) -> ResolutionOutcome:
    if token == "123":
        return ResolutionOutcome(
            record=Record(
                bundle="123",
                name="My,App",
                publisher="Dev",
                url="https://apps.apple.com/app/id123",
            )
        )
    return ResolutionOutcome.failed(UnrecognizedPlatformError(token))


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def fake_resolver():
    with patch("bundleresolver.cli.StoreResolver") as store_resolver:
        store_resolver.return_value = _fake_store_resolver
        yield store_resolver


class TestCLI:
    """Test flag handling and exit behaviour."""

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"], input="123\n")
        assert result.exit_code == 0
        assert result.output == f"{__version__}\n"

    def test_invalid_fields_exit_nonzero(self, runner, fake_resolver):
        result = runner.invoke(main, ["--fields", "name,title"], input="123\n")
        assert result.exit_code != 0
        assert "unknown field 'title'" in result.output
        fake_resolver.assert_not_called()

    def test_empty_fields_exit_nonzero(self, runner, fake_resolver):
        result = runner.invoke(main, ["-f", " , "], input="123\n")
        assert result.exit_code != 0
        assert "no valid fields" in result.output

    def test_default_tsv_output(self, runner, fake_resolver):
        result = runner.invoke(main, [], input="123\n\n")
        assert result.exit_code == 0
        assert result.output == (
            "name\tpublisher\turl\n"
            "My,App\tDev\thttps://apps.apple.com/app/id123\n"
            "\t\t\n"
        )

    def test_csv_without_header(self, runner, fake_resolver):
        result = runner.invoke(
            main, ["--format", "csv", "--no-header", "-f", "bundle,name"], input="123\n"
        )
        assert result.exit_code == 0
        assert result.output == '123,"My,App"\n'

    def test_failures_do_not_change_exit_status(self, runner, fake_resolver):
        result = runner.invoke(main, ["--skip-errors", "--no-header"], input="bad id\n123\n")
        assert result.exit_code == 0
        assert 'resolve "bad id": cannot detect platform' in result.output
        assert "My,App\tDev\thttps://apps.apple.com/app/id123\n" in result.output

    def test_ios_country_and_timeout_override_settings(self, runner, fake_resolver):
        result = runner.invoke(
            main,
            ["--ios-country", "GB", "--ios-country", "jp", "--timeout", "2.5", "--no-header"],
            input="",
        )
        assert result.exit_code == 0
        _, settings = fake_resolver.call_args.args
        assert settings.ios_fallback_countries == ["gb", "jp"]
        assert settings.http_timeout == 2.5

    def test_invalid_timeout(self, runner, fake_resolver):
        result = runner.invoke(main, ["--timeout", "0"], input="")
        assert result.exit_code != 0

    def test_undecodable_input_line_does_not_abort_run(self, runner, fake_resolver):
        result = runner.invoke(
            main, ["--no-header", "-f", "name"], input=b"123\n\xff\xfe.bad\n123\n"
        )
        assert result.exit_code == 0
        assert result.exception is None
        assert 'resolve "\ufffd\ufffd.bad": cannot detect platform' in result.output
        assert result.output.count("My,App\n") == 2

    def test_stream_error_exits_with_status_1(self, runner, fake_resolver):
        with patch(
            "bundleresolver.cli.LineProcessor.process",
            side_effect=OSError("No space left on device"),
        ):
            result = runner.invoke(main, ["--no-header"], input="123\n")
        assert result.exit_code == 1
        assert "error: No space left on device" in result.output
