"""Machine-readable output: one JSON object per line."""

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from aiolibtest.aggregator import Report
from aiolibtest.models.event import TestFinished, TestStarted
from aiolibtest.reporting.base import Reporter
from aiolibtest.selection import Selection

EVENT_NAMES = {
    "passed": "ok",
    "failed": "failed",
    "ignored": "ignored",
    "measured": "ok",
}


@dataclass(kw_only=True)
class JsonReporter(Reporter):
    """Writes libtest-style JSON lines.

    Every record carries ``type`` and ``event``; test records also carry
    ``name`` and, once finished, ``exec_time`` in seconds. Field names and
    their order are stable. Output is never colored.
    """

    def emit(self, record: dict[str, Any]) -> None:
        """Write one record as a single line."""
        self.console.print(json.dumps(record))

    def run_started(self, selections: Sequence[Selection]) -> None:
        """Emit the suite started record."""
        count = sum(1 for selection in selections if selection.is_listed)
        self.emit({"type": "suite", "event": "started", "test_count": count})

    def test_started(self, event: TestStarted) -> None:
        """Emit a test started record."""
        self.emit(
            {
                "type": event.descriptor.kind,
                "event": "started",
                "name": event.descriptor.name,
            }
        )

    def test_finished(self, event: TestFinished) -> None:
        """Emit the record for one outcome."""
        outcome = event.outcome
        record: dict[str, Any] = {
            "type": event.descriptor.kind,
            "name": event.name,
            "event": EVENT_NAMES[outcome.status],
        }
        if event.exec_time is not None:
            record["exec_time"] = round(event.exec_time, 6)
        if outcome.status == "failed" and outcome.message is not None:
            record["stdout"] = outcome.message
        if outcome.status == "measured":
            record["median"] = outcome.average
            record["deviation"] = outcome.variance
        self.emit(record)

    def run_finished(self, report: Report, exec_time: float) -> None:
        """Emit the suite summary record."""
        summary = report.summary
        self.emit(
            {
                "type": "suite",
                "event": "ok" if report.success else "failed",
                "passed": summary.passed,
                "failed": summary.failed,
                "ignored": summary.ignored,
                "measured": summary.measured,
                "filtered_out": summary.filtered_out,
                "exec_time": round(exec_time, 6),
            }
        )

    def list_tests(self, selections: Sequence[Selection]) -> None:
        """Emit one discovered record per listed descriptor."""
        for selection in selections:
            descriptor = selection.descriptor
            self.emit(
                {
                    "type": descriptor.kind,
                    "event": "discovered",
                    "name": descriptor.name,
                    "ignore": descriptor.ignored,
                }
            )
