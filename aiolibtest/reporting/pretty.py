"""Verbose output: one line per test."""

from dataclasses import dataclass

from aiolibtest.models.event import TestFinished
from aiolibtest.reporting.base import TextReporter


@dataclass(kw_only=True)
class PrettyReporter(TextReporter):
    """Prints ``test <name> ... <result>`` as each outcome arrives."""

    def test_finished(self, event: TestFinished) -> None:
        """Print the result line for one outcome."""
        self.print_result_line(event)
