"""Quiet output: one character per test."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from rich.text import Text

from aiolibtest.aggregator import Report
from aiolibtest.models.event import TestFinished
from aiolibtest.reporting.base import TextReporter
from aiolibtest.selection import Selection

# Characters printed before the progress counter wraps the line.
MAX_COLUMN = 88

# Progress character and the pretty token whose color it borrows.
OUTCOME_CHARS = {
    "passed": (".", "ok"),
    "failed": ("F", "FAILED"),
    "ignored": ("i", "ignored"),
    "measured": ("B", "bench"),
}


@dataclass(kw_only=True)
class TerseReporter(TextReporter):
    """Prints one character per outcome, wrapped with a progress counter."""

    reported: int = field(default=0, init=False)

    def test_finished(self, event: TestFinished) -> None:
        """Print the character for one outcome."""
        char, token = OUTCOME_CHARS[event.outcome.status]
        self.console.print(Text(char, style=self.styled(token).style), end="")
        self.reported += 1

        if self.reported % MAX_COLUMN == 0:
            self.console.print(f" {self.reported}/{self.test_count}")

    def run_finished(self, report: Report, exec_time: float) -> None:
        """Terminate the progress line, then print the shared trailer."""
        if self.reported % MAX_COLUMN != 0:
            self.console.print()
        super().run_finished(report, exec_time)

    def list_tests(self, selections: Sequence[Selection]) -> None:
        """Print only the listed names, without totals."""
        self._list_names(selections)
