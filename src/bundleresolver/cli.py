"""Command-line entry point for bundleresolver.

Reads iOS App IDs or Android package names from stdin, one per line,
and writes one row per line to stdout.

Usage:
    bundleresolver [--fields name,publisher,url] [--format tsv|csv]
                   [--header/--no-header] [--skip-errors] < ids.txt
"""

import sys

import click

from . import __version__
from .config import DEFAULT_FIELDS, OutputConfig, get_settings, parse_fields
from .errors import ConfigurationError
from .logging import setup_logging
from .models import Field
from .processor import LineProcessor
from .resolvers import StoreResolver, create_http_client


def _validate_fields(ctx: click.Context, param: click.Parameter, value: str):
    try:
        return parse_fields(value)
    except ConfigurationError as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from e


@click.command(
    name="bundleresolver",
    epilog="Input: lines of either numeric iOS App IDs or Android package names (with dots).",
)
@click.version_option(version=__version__, prog_name="bundleresolver", message="%(version)s")
@click.option(
    "--fields",
    "-f",
    default=DEFAULT_FIELDS,
    show_default=True,
    callback=_validate_fields,
    help=f"Comma-separated list of fields to output (allowed: {','.join(f.value for f in Field)})",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["tsv", "csv"]),
    default="tsv",
    show_default=True,
    help="Output format",
)
@click.option(
    "--header/--no-header",
    default=True,
    show_default=True,
    help="Print header row as first line",
)
@click.option(
    "--skip-errors",
    is_flag=True,
    help="Skip lines that fail to resolve instead of outputting placeholder rows",
)
@click.option(
    "--ios-country",
    "ios_countries",
    multiple=True,
    help="Country to retry iOS lookups in when the default storefront has no result "
    "(repeatable, tried in order; default from settings)",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="HTTP request timeout in seconds (default from settings)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging",
)
def main(
    fields: tuple[Field, ...],
    output_format: str,
    header: bool,
    skip_errors: bool,
    ios_countries: tuple[str, ...],
    timeout: float | None,
    verbose: bool,
):
    """Resolve app store identifiers to name, publisher and URL."""
    setup_logging("DEBUG" if verbose else None)

    settings = get_settings()
    overrides = {}
    if ios_countries:
        overrides["ios_fallback_countries"] = [c.strip().lower() for c in ios_countries if c.strip()]
    if timeout is not None:
        overrides["http_timeout"] = timeout
    if overrides:
        settings = settings.model_copy(update=overrides)

    config = OutputConfig(
        fields=fields,
        output_format=output_format,
        header=header,
        skip_errors=skip_errors,
    )

    try:
        with create_http_client(settings) as client:
            processor = LineProcessor(StoreResolver(client, settings), config)
            processor.process(
                click.get_text_stream("stdin", errors="replace"),
                click.get_text_stream("stdout"),
                click.get_text_stream("stderr"),
            )
    except OSError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
