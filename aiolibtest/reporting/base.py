"""Abstract base class for output formats."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import IO, Any

from rich.console import Console
from rich.text import Text

from aiolibtest.aggregator import Report
from aiolibtest.models.event import Event, TestFinished, TestStarted
from aiolibtest.models.options import ColorPolicy
from aiolibtest.selection import Selection

OUTCOME_STYLES = {
    "ok": "green",
    "FAILED": "red",
    "ignored": "yellow",
    "bench": "cyan",
}

RESULT_TOKENS = {"passed": "ok", "failed": "FAILED", "ignored": "ignored"}


def make_console(color: ColorPolicy, file: IO[str] | None = None) -> Console:
    """Create a console writing plain text, styled according to the color policy.

    Args:
        color: ``always`` forces ANSI styling, ``never`` disables it and
            ``auto`` leaves terminal detection to rich
        file: Output stream (default: standard output)

    """
    common: dict[str, Any] = {
        "file": file,
        "markup": False,
        "emoji": False,
        "highlight": False,
    }
    if color == "always":
        return Console(
            force_terminal=True,
            color_system="standard",
            no_color=False,
            soft_wrap=True,
            **common,
        )
    if color == "never":
        return Console(color_system=None, soft_wrap=True, **common)
    return Console(soft_wrap=True, **common)


def plural(count: int, noun: str) -> str:
    """Format a count with an English plural suffix."""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


@dataclass(kw_only=True)
class Reporter(ABC):
    """Renders scheduler events in one output format.

    A reporter is an event sink: the scheduler hands it each event as soon as
    it is published, and the reporter writes it out without reordering.
    """

    console: Console

    def handle(self, event: Event) -> None:
        """Dispatch one scheduler event."""
        if isinstance(event, TestStarted):
            self.test_started(event)
        elif isinstance(event, TestFinished):
            if event.outcome.status != "filtered_out":
                self.test_finished(event)

    @abstractmethod
    def run_started(self, selections: Sequence[Selection]) -> None:
        """Called once before the scheduler starts.

        Args:
            selections: The complete selection, including filtered out entries

        """

    def test_started(self, event: TestStarted) -> None:
        """Called when a unit of work obtains a slot."""

    @abstractmethod
    def test_finished(self, event: TestFinished) -> None:
        """Called with each outcome that is not filtered out."""

    @abstractmethod
    def run_finished(self, report: Report, exec_time: float) -> None:
        """Called once after every event was published."""

    def list_tests(self, selections: Sequence[Selection]) -> None:
        """Print listed descriptors and their kinds followed by the totals."""
        self._list_names(selections)
        listed = [selection.descriptor for selection in selections]
        num_benches = sum(1 for descriptor in listed if descriptor.is_bench)
        num_tests = len(listed) - num_benches

        if listed:
            self.console.print()
        self.console.print(
            f"{plural(num_tests, 'test')}, {plural(num_benches, 'benchmark')}"
        )

    def _list_names(self, selections: Sequence[Selection]) -> None:
        for selection in selections:
            descriptor = selection.descriptor
            self.console.print(f"{descriptor.name}: {descriptor.kind_label}")


@dataclass(kw_only=True)
class TextReporter(Reporter):
    """Shared behavior of the human-readable formats."""

    name_width: int = field(default=0, init=False)
    test_count: int = field(default=0, init=False)

    def styled(self, token: str) -> Text:
        """Return an outcome token with its color."""
        return Text(token, style=OUTCOME_STYLES.get(token, ""))

    def run_started(self, selections: Sequence[Selection]) -> None:
        """Print the number of tests about to be reported."""
        listed = [selection for selection in selections if selection.is_listed]
        self.test_count = len(listed)
        self.name_width = max(
            (len(selection.descriptor.name) for selection in listed), default=0
        )
        self.console.print()
        self.console.print(f"running {plural(self.test_count, 'test')}")

    def print_result_line(self, event: TestFinished) -> None:
        """Print the ``test <name> ... <result>`` line for one outcome."""
        outcome = event.outcome
        if outcome.status == "measured":
            line = Text.assemble(
                f"test {event.name:<{self.name_width}} ... ",
                self.styled("bench"),
                f": {outcome.average:>11,} ns/iter (+/- {outcome.variance:,})",
            )
        else:
            token = RESULT_TOKENS.get(outcome.status, "ignored")
            line = Text.assemble(f"test {event.name} ... ", self.styled(token))
        self.console.print(line)

    def run_finished(self, report: Report, exec_time: float) -> None:
        """Print the failures section and the result line."""
        if report.failed:
            self.console.print()
            self.console.print("failures:")
            for descriptor, message in report.failed:
                self.console.print(f"---- {descriptor.name} ----")
                if message:
                    self.console.print(message.rstrip("\n"))

            self.console.print()
            self.console.print("failures:")
            for descriptor, _ in report.failed:
                self.console.print(f"    {descriptor.name}")

        summary = report.summary
        status = self.styled("ok" if report.success else "FAILED")
        self.console.print()
        self.console.print(
            Text.assemble(
                "test result: ",
                status,
                f". {summary.passed} passed; {summary.failed} failed; "
                f"{summary.ignored} ignored; {summary.measured} measured; "
                f"{summary.filtered_out} filtered out; "
                f"finished in {exec_time:.2f}s",
            )
        )
