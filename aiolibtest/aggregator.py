"""Aggregation of test outcomes into a report and an exit status."""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Literal

from aiolibtest.exit_status import ExitStatus
from aiolibtest.models.descriptor import TestDescriptor
from aiolibtest.models.event import Event, TestFinished


@dataclass(frozen=True, kw_only=True)
class RunSummary:
    """Outcome counts of a run."""

    passed: int = 0
    failed: int = 0
    ignored: int = 0
    measured: int = 0
    filtered_out: int = 0

    @property
    def total(self) -> int:
        """Number of selected descriptors, excluding filtered out ones."""
        return self.passed + self.failed + self.ignored + self.measured

    @property
    def overall_success(self) -> bool:
        """True iff no descriptor failed."""
        return self.failed == 0

    @property
    def status(self) -> ExitStatus:
        """Exit status derived from the failure count."""
        return ExitStatus.OK if self.overall_success else ExitStatus.FAILED

    @classmethod
    def from_events(cls, events: Iterable[Event]) -> "RunSummary":
        """Fold an event stream into counts."""
        aggregator = ResultAggregator()
        for event in events:
            aggregator.handle(event)
        return aggregator.report().summary


@dataclass(frozen=True, kw_only=True)
class Report:
    """A report on test suite execution, listing descriptors per outcome."""

    passed: Sequence[TestDescriptor] = ()
    failed: Sequence[tuple[TestDescriptor, str | None]] = ()
    measured: Sequence[tuple[TestDescriptor, tuple[int, int]]] = ()
    ignored: Sequence[TestDescriptor] = ()
    filtered_out: Sequence[TestDescriptor] = ()

    @property
    def summary(self) -> RunSummary:
        """Counts of this report."""
        return RunSummary(
            passed=len(self.passed),
            failed=len(self.failed),
            ignored=len(self.ignored),
            measured=len(self.measured),
            filtered_out=len(self.filtered_out),
        )

    @property
    def success(self) -> bool:
        """Whether no test failed."""
        return not self.failed

    @property
    def status(self) -> ExitStatus:
        """Exit status to use as the result of the test process."""
        return ExitStatus.OK if self.success else ExitStatus.FAILED

    def skipped(
        self,
    ) -> Iterator[tuple[TestDescriptor, Literal["ignored", "filtered out"]]]:
        """Iterate over descriptors that were not run, with the reason."""
        for descriptor in self.ignored:
            yield descriptor, "ignored"
        for descriptor in self.filtered_out:
            yield descriptor, "filtered out"


@dataclass(kw_only=True)
class ResultAggregator:
    """Event sink folding finished events into a Report."""

    _passed: list[TestDescriptor] = field(default_factory=list)
    _failed: list[tuple[TestDescriptor, str | None]] = field(default_factory=list)
    _measured: list[tuple[TestDescriptor, tuple[int, int]]] = field(
        default_factory=list
    )
    _ignored: list[TestDescriptor] = field(default_factory=list)
    _filtered_out: list[TestDescriptor] = field(default_factory=list)

    def handle(self, event: Event) -> None:
        """Apply one event to the running counters."""
        if not isinstance(event, TestFinished):
            return

        outcome = event.outcome
        descriptor = event.descriptor
        if outcome.status == "passed":
            self._passed.append(descriptor)
        elif outcome.status == "failed":
            self._failed.append((descriptor, outcome.message))
        elif outcome.status == "measured":
            self._measured.append(
                (descriptor, (outcome.average or 0, outcome.variance or 0))
            )
        elif outcome.status == "ignored":
            self._ignored.append(descriptor)
        else:
            self._filtered_out.append(descriptor)

    def report(self) -> Report:
        """Snapshot of everything aggregated so far."""
        return Report(
            passed=tuple(self._passed),
            failed=tuple(self._failed),
            measured=tuple(self._measured),
            ignored=tuple(self._ignored),
            filtered_out=tuple(self._filtered_out),
        )

    @property
    def summary(self) -> RunSummary:
        """Counts aggregated so far."""
        return self.report().summary

    @property
    def status(self) -> ExitStatus:
        """Exit status derived from the events aggregated so far."""
        return self.summary.status
