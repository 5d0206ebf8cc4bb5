"""Line-by-line processing of identifier streams.

Each input line produces exactly one output row, so output stays
aligned with input. The only exception is a failed line when
skip-errors is enabled.
"""

import json
import time
from dataclasses import dataclass
from typing import TextIO

from .config import OutputConfig
from .formatter import RowFormatter
from .logging import get_logger, log_run_complete
from .resolvers import Resolver

logger = get_logger(__name__)


@dataclass
class ProcessingSummary:
    """Counts for a processing run."""

    lines: int = 0
    blank: int = 0
    resolved: int = 0
    failed: int = 0
    skipped: int = 0


def format_diagnostic(token: str, reason: str) -> str:
    """Format the error-stream line for a failed identifier."""
    return f"resolve {json.dumps(token, ensure_ascii=False)}: {reason}"


class LineProcessor:
    """Resolve identifiers read from a stream and write formatted rows.

    Args:
        resolver: Callable mapping a trimmed identifier to an outcome
        config: Output options for the run
    """

    def __init__(self, resolver: Resolver, config: OutputConfig):
        self.resolver = resolver
        self.config = config
        self.formatter = RowFormatter(config)

    def process(self, source: TextIO, out: TextIO, err: TextIO) -> ProcessingSummary:
        """Process every line of `source`.

        Per-line resolution failures are reported to `err` and never stop
        the run. Stream errors (OSError) propagate to the caller.

        Returns:
            Summary of the run
        """
        summary = ProcessingSummary()
        started = time.monotonic()

        if self.config.header:
            out.write(self.formatter.header())

        for raw in source:
            summary.lines += 1
            token = raw.strip()
            if not token:
                summary.blank += 1
                out.write(self.formatter.empty_row())
                continue

            outcome = self.resolver(token)
            if outcome.ok:
                summary.resolved += 1
                out.write(self.formatter.row(outcome.record))
                continue

            summary.failed += 1
            err.write(format_diagnostic(token, str(outcome.error)) + "\n")
            if self.config.skip_errors:
                summary.skipped += 1
                continue
            out.write(self.formatter.row(outcome.record))

        out.flush()
        log_run_complete(
            summary.lines,
            summary.resolved,
            summary.failed,
            summary.skipped,
            time.monotonic() - started,
        )
        return summary
