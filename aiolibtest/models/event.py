"""Models for events published by the scheduler."""

from dataclasses import dataclass

from aiolibtest.models.descriptor import TestDescriptor
from aiolibtest.models.outcome import Outcome


@dataclass(frozen=True, kw_only=True)
class TestStarted:
    """A descriptor obtained a concurrency slot and its work is being driven."""

    __test__ = False

    index: int
    descriptor: TestDescriptor

    @property
    def name(self) -> str:
        """Name of the descriptor being driven."""
        return self.descriptor.name


@dataclass(frozen=True, kw_only=True)
class TestFinished:
    """Terminal outcome for one descriptor.

    ``index`` is the position in the selected sequence. ``exec_time`` is the
    wall-clock duration in seconds, or None for synthesized outcomes.
    """

    __test__ = False

    index: int
    descriptor: TestDescriptor
    outcome: Outcome
    exec_time: float | None = None

    @property
    def name(self) -> str:
        """Name of the descriptor this event is about."""
        return self.descriptor.name


Event = TestStarted | TestFinished
