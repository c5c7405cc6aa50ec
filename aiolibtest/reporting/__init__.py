"""Output formats for test runs."""

from collections.abc import Mapping
from typing import IO

from aiolibtest.models.options import OutputFormat, RunOptions
from aiolibtest.reporting.base import Reporter, make_console
from aiolibtest.reporting.jsonl import JsonReporter
from aiolibtest.reporting.pretty import PrettyReporter
from aiolibtest.reporting.terse import TerseReporter

REPORTERS: Mapping[OutputFormat, type[Reporter]] = {
    "pretty": PrettyReporter,
    "terse": TerseReporter,
    "json": JsonReporter,
}


def create_reporter(options: RunOptions, file: IO[str] | None = None) -> Reporter:
    """Create the reporter selected by the run options.

    Args:
        options: Run options providing the output format and color policy
        file: Output stream (default: standard output)

    Returns:
        A reporter writing to the given stream

    """
    color = "never" if options.format == "json" else options.color
    return REPORTERS[options.format](console=make_console(color, file))


__all__ = [
    "JsonReporter",
    "PrettyReporter",
    "Reporter",
    "TerseReporter",
    "create_reporter",
    "make_console",
]
