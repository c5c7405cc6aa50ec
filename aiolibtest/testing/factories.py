"""Test factories and recording units of work."""

import asyncio
from dataclasses import dataclass

from polyfactory import Use
from polyfactory.factories import DataclassFactory

from aiolibtest.aggregator import RunSummary
from aiolibtest.models.descriptor import TestDescriptor
from aiolibtest.models.outcome import Outcome


@dataclass(kw_only=True)
class RecordingWork:
    """Unit of work that counts its executions and returns a fixed result."""

    outcome: Outcome | None = None
    delay: float = 0.0
    error: Exception | None = None
    calls: int = 0

    async def __call__(self) -> Outcome | None:
        """Sleep for ``delay`` then return ``outcome`` or raise ``error``."""
        self.calls += 1
        await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.outcome


class DescriptorFactory(DataclassFactory[TestDescriptor]):
    """Factory for TestDescriptor backed by a passing RecordingWork."""

    __model__ = TestDescriptor

    kind = "test"
    ignored = False
    unit_of_work = Use(RecordingWork)


class RunSummaryFactory(DataclassFactory[RunSummary]):
    """Factory for RunSummary with random counts."""

    __model__ = RunSummary
