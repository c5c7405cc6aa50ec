"""Tests for Outcome constructors."""

import pytest

from aiolibtest.models.outcome import EXECUTED_STATUSES, Outcome


def test_passed() -> None:
    """Passed outcome carries no message or measurement."""
    outcome = Outcome.passed()

    assert outcome.status == "passed"
    assert outcome.message is None
    assert outcome.average is None


def test_failed_with_message() -> None:
    """Failed outcome keeps the error message."""
    assert Outcome.failed("boom") == Outcome(status="failed", message="boom")


def test_failed_without_message() -> None:
    """Failed outcome message is optional."""
    assert Outcome.failed().message is None


def test_measured() -> None:
    """Measured outcome exposes the average as elapsed nanoseconds."""
    outcome = Outcome.measured(1500, 23)

    assert outcome.status == "measured"
    assert outcome.average == 1500
    assert outcome.variance == 23
    assert outcome.elapsed_ns == 1500


def test_measured_variance_defaults_to_zero() -> None:
    """Variance is optional for measurements."""
    assert Outcome.measured(10).variance == 0


@pytest.mark.parametrize(("average", "variance"), [(-1, 0), (1, -1)])
def test_measured_rejects_negative_values(average: int, variance: int) -> None:
    """Measurements cannot be negative."""
    with pytest.raises(ValueError, match="must not be negative"):
        Outcome.measured(average, variance)


def test_synthesized_outcomes_are_not_executed_statuses() -> None:
    """Ignored and filtered out outcomes are reserved for the scheduler."""
    assert Outcome.ignored().status not in EXECUTED_STATUSES
    assert Outcome.filtered_out().status not in EXECUTED_STATUSES
