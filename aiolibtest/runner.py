"""Test runner coordinating selection, scheduling, reporting and aggregation."""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import IO

from aiolibtest.aggregator import Report, ResultAggregator
from aiolibtest.exit_status import ExitStatus
from aiolibtest.models.descriptor import TestDescriptor
from aiolibtest.models.options import RunOptions
from aiolibtest.reporting import Reporter, create_reporter
from aiolibtest.scheduler import Scheduler
from aiolibtest.selection import select_tests

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class TestRunner:
    """Runs a set of descriptors with one reporter."""

    __test__ = False

    options: RunOptions
    reporter: Reporter

    async def run(self, tests: Iterable[TestDescriptor]) -> Report:
        """Select, run and report the given descriptors.

        In list mode the selected descriptors are printed and no unit of work
        is executed; the returned report is empty.

        Args:
            tests: Registered descriptors, in registration order

        Returns:
            Report of every outcome, including ignored and filtered out ones

        """
        selections = select_tests(tests, self.options)

        if self.options.list_only:
            log.info("Listing tests without running them")
            self.reporter.list_tests(
                [selection for selection in selections if selection.is_listed]
            )
            return Report()

        loop = asyncio.get_running_loop()
        started = loop.time()
        aggregator = ResultAggregator()
        scheduler = Scheduler(concurrency_limit=self.options.concurrency_limit)

        self.reporter.run_started(selections)
        await scheduler.run(selections, sinks=(self.reporter, aggregator))
        report = aggregator.report()
        self.reporter.run_finished(report, loop.time() - started)

        log.info(
            "Run finished: passed=%d failed=%d ignored=%d measured=%d",
            len(report.passed),
            len(report.failed),
            len(report.ignored),
            len(report.measured),
        )
        return report


async def run_tests_with_report(
    options: RunOptions,
    tests: Iterable[TestDescriptor],
    file: IO[str] | None = None,
) -> Report:
    """Run a test suite and return the report.

    Args:
        options: Run options
        tests: Registered descriptors, e.g. a Registry
        file: Output stream for the reporter (default: standard output)

    """
    runner = TestRunner(options=options, reporter=create_reporter(options, file))
    return await runner.run(tests)


async def run_tests(
    options: RunOptions,
    tests: Iterable[TestDescriptor],
    file: IO[str] | None = None,
) -> ExitStatus:
    """Run a test suite and return the exit status to terminate with.

    Descriptors are filtered according to the options, run concurrently from
    the top, and their results are written in the order of completion.
    """
    report = await run_tests_with_report(options, tests, file)
    return report.status
