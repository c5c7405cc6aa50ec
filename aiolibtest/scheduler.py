"""Execution driver running selected descriptors under a concurrency bound."""

import asyncio
import logging
import traceback
from collections.abc import AsyncIterator, Sequence
from contextlib import aclosing
from dataclasses import dataclass
from typing import Protocol

from aiolibtest.models.descriptor import TestDescriptor
from aiolibtest.models.event import Event, TestFinished, TestStarted
from aiolibtest.models.outcome import EXECUTED_STATUSES, Outcome
from aiolibtest.selection import Selection

log = logging.getLogger(__name__)


class EventSink(Protocol):
    """Consumer of scheduler events.

    Sinks are called serially, one event at a time, from the driver coroutine.
    """

    def handle(self, event: Event) -> None:
        """Consume one event."""


@dataclass(frozen=True, kw_only=True)
class Scheduler:
    """Drives units of work to completion, at most ``concurrency_limit`` at once.

    Descriptors that are not selected to run get a synthesized outcome when
    the walk over the selection reaches them. Running descriptors are reported
    in completion order. Whenever every slot is busy the walk waits for a
    completion before moving on, so a limit of 1 reports events in exactly the
    order of the selection.
    """

    concurrency_limit: int | None = None

    def __post_init__(self) -> None:
        if self.concurrency_limit is not None and self.concurrency_limit < 1:
            raise ValueError("concurrency_limit must be a positive integer or None")

    async def run(
        self,
        selections: Sequence[Selection],
        sinks: Sequence[EventSink] = (),
    ) -> Sequence[Event]:
        """Run the selection, publishing every event to each sink in turn.

        Args:
            selections: Descriptors with their dispositions, in selection order
            sinks: Consumers receiving each event before the scheduler advances

        Returns:
            All published events, in publication order, for replay

        """
        published: list[Event] = []
        async with aclosing(self.events(selections)) as events:
            async for event in events:
                for sink in sinks:
                    sink.handle(event)
                published.append(event)
        return published

    async def events(self, selections: Sequence[Selection]) -> AsyncIterator[Event]:
        """Yield started and finished events as the selection is driven."""
        pending: dict[asyncio.Task[TestFinished], Selection] = {}
        log.info(
            "Dispatching %d test(s) (concurrency limit: %s)",
            sum(1 for selection in selections if selection.runs),
            self.concurrency_limit or "unbounded",
        )

        try:
            for selection in selections:
                if not selection.runs:
                    yield synthesize(selection)
                    continue

                yield TestStarted(
                    index=selection.index, descriptor=selection.descriptor
                )
                task = asyncio.create_task(
                    drive(selection), name=f"test:{selection.descriptor.name}"
                )
                pending[task] = selection

                while self._is_full(len(pending)):
                    for finished in await self._next_completions(pending):
                        yield finished

            while pending:
                for finished in await self._next_completions(pending):
                    yield finished
        finally:
            if pending:
                log.debug("Cancelling %d in-flight test(s)", len(pending))
                for task in pending:
                    task.cancel()
                await asyncio.gather(*pending, return_exceptions=True)

        log.info("Test execution completed")

    def _is_full(self, in_flight: int) -> bool:
        limit = self.concurrency_limit
        return limit is not None and in_flight >= limit

    async def _next_completions(
        self, pending: dict[asyncio.Task[TestFinished], Selection]
    ) -> Sequence[TestFinished]:
        """Wait for at least one task and return its events by selection index."""
        done, _ = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)

        completions: list[TestFinished] = []
        for task in done:
            selection = pending.pop(task)
            if task.cancelled():
                completions.append(
                    TestFinished(
                        index=selection.index,
                        descriptor=selection.descriptor,
                        outcome=Outcome.failed("test was cancelled"),
                    )
                )
            else:
                completions.append(task.result())

        return sorted(completions, key=lambda finished: finished.index)


def synthesize(selection: Selection) -> TestFinished:
    """Build the outcome event for a descriptor that is not run."""
    if selection.disposition == "skip_ignored":
        outcome = Outcome.ignored()
    else:
        outcome = Outcome.filtered_out()
    return TestFinished(
        index=selection.index, descriptor=selection.descriptor, outcome=outcome
    )


async def drive(selection: Selection) -> TestFinished:
    """Drive one unit of work to completion, containing any exception it raises."""
    descriptor = selection.descriptor
    loop = asyncio.get_running_loop()
    started = loop.time()
    log.debug("Test started: %s", descriptor.name)

    try:
        result = await descriptor.unit_of_work()
    except Exception as exc:
        log.debug("Test %s raised %r", descriptor.name, exc, exc_info=exc)
        outcome = Outcome.failed("".join(traceback.format_exception(exc)))
    else:
        outcome = check_outcome(descriptor, result)

    exec_time = loop.time() - started
    log.debug(
        "Test completed: name=%s status=%s duration=%.3fs",
        descriptor.name,
        outcome.status,
        exec_time,
    )
    return TestFinished(
        index=selection.index,
        descriptor=descriptor,
        outcome=outcome,
        exec_time=exec_time,
    )


def check_outcome(descriptor: TestDescriptor, result: object) -> Outcome:
    """Validate what a unit of work returned, turning violations into failures."""
    if result is None:
        return Outcome.passed()

    if not isinstance(result, Outcome):
        return Outcome.failed(
            f"unit of work returned {type(result).__name__}, expected an Outcome"
        )

    if result.status not in EXECUTED_STATUSES:
        return Outcome.failed(f"unit of work returned a {result.status} outcome")

    if result.status == "measured":
        if not descriptor.is_bench:
            return Outcome.failed("test returned a benchmark measurement")
        if not (is_count(result.average) and is_count(result.variance)):
            return Outcome.failed(
                "benchmark measurement must carry non-negative integer "
                f"average and variance, got {result.average!r} "
                f"and {result.variance!r}"
            )

    if result.status == "failed" and not isinstance(result.message, str | None):
        return Outcome.failed(
            f"failure message must be a string, got {type(result.message).__name__}"
        )

    return result


def is_count(value: object) -> bool:
    """Whether ``value`` is a non-negative int (bools excluded)."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
