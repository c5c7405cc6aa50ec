"""Models describing registered tests and benchmarks."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Literal

from aiolibtest.models.outcome import Outcome

TestKind = Literal["test", "bench"]

# A unit of work produces an Outcome when awaited; returning None means passed.
UnitOfWork = Callable[[], Awaitable[Outcome | None]]


@dataclass(frozen=True, kw_only=True)
class TestDescriptor:
    """A registered test case plus the asynchronous work that runs it."""

    __test__ = False

    name: str
    kind: TestKind = "test"
    ignored: bool = False
    unit_of_work: UnitOfWork = field(repr=False, compare=False)

    @property
    def is_bench(self) -> bool:
        """Whether this descriptor is a benchmark."""
        return self.kind == "bench"

    @property
    def kind_label(self) -> str:
        """Human-readable kind as printed by the list output."""
        return "benchmark" if self.is_bench else "test"
