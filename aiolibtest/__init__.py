"""A libtest-compatible harness for asynchronous tests and benchmarks.

Example::

    from aiolibtest import Outcome, Registry, main

    registry = Registry()

    @registry.test()
    async def case1() -> None:
        assert "foo" != "bar"

    @registry.test(ignored=True)
    async def case2_long_computation() -> Outcome:
        return Outcome.failed("`bar' is forbidden")

    if __name__ == "__main__":
        main(registry)
"""

from aiolibtest.aggregator import Report, ResultAggregator, RunSummary
from aiolibtest.cli import main, parse_args
from aiolibtest.errors import ConfigurationError, HelpRequested
from aiolibtest.exit_status import ExitStatus
from aiolibtest.models.descriptor import TestDescriptor
from aiolibtest.models.options import RunOptions
from aiolibtest.models.outcome import Outcome
from aiolibtest.registry import Registry
from aiolibtest.runner import TestRunner, run_tests, run_tests_with_report

__all__ = [
    "ConfigurationError",
    "ExitStatus",
    "HelpRequested",
    "Outcome",
    "Registry",
    "Report",
    "ResultAggregator",
    "RunOptions",
    "RunSummary",
    "TestDescriptor",
    "TestRunner",
    "main",
    "parse_args",
    "run_tests",
    "run_tests_with_report",
]
