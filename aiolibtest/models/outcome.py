"""Models for the terminal result of a single test or benchmark."""

from dataclasses import dataclass
from typing import Literal

OutcomeStatus = Literal["passed", "failed", "measured", "ignored", "filtered_out"]

# Statuses a unit of work is allowed to produce; the rest are synthesized.
EXECUTED_STATUSES: frozenset[OutcomeStatus] = frozenset(
    {"passed", "failed", "measured"}
)


@dataclass(frozen=True, kw_only=True)
class Outcome:
    """Result of driving (or skipping) one descriptor.

    Benchmarks report their measurement as an average and a variance, both in
    nanoseconds per iteration.
    """

    status: OutcomeStatus
    message: str | None = None
    average: int | None = None
    variance: int | None = None

    @classmethod
    def passed(cls) -> "Outcome":
        """Create a passing outcome."""
        return cls(status="passed")

    @classmethod
    def failed(cls, message: str | None = None) -> "Outcome":
        """Create a failing outcome with an optional error message."""
        return cls(status="failed", message=message)

    @classmethod
    def measured(cls, average: int, variance: int = 0) -> "Outcome":
        """Create a benchmark measurement outcome."""
        if average < 0 or variance < 0:
            raise ValueError("benchmark measurements must not be negative")
        return cls(status="measured", average=average, variance=variance)

    @classmethod
    def ignored(cls) -> "Outcome":
        """Create the outcome for a descriptor skipped by the ignore policy."""
        return cls(status="ignored")

    @classmethod
    def filtered_out(cls) -> "Outcome":
        """Create the outcome for a descriptor excluded by filters."""
        return cls(status="filtered_out")

    @property
    def elapsed_ns(self) -> int | None:
        """Measured nanoseconds per iteration, if this is a measurement."""
        return self.average
