"""Shared fixtures for unit tests."""

import io

import pytest

from aiolibtest.models.outcome import Outcome
from aiolibtest.registry import Registry
from aiolibtest.testing.factories import RecordingWork


@pytest.fixture
def output() -> io.StringIO:
    """Capture stream for reporter output."""
    return io.StringIO()


@pytest.fixture
def registry() -> Registry:
    """Passing "a", failing "b" and ignored "c"."""
    registry = Registry()
    registry.add_test("a", RecordingWork())
    registry.add_test("b", RecordingWork(outcome=Outcome.failed("boom")))
    registry.add_test("c", RecordingWork(), ignored=True)
    return registry
