"""Data models shared by the harness components."""

from aiolibtest.models.descriptor import TestDescriptor, TestKind, UnitOfWork
from aiolibtest.models.event import Event, TestFinished, TestStarted
from aiolibtest.models.options import RunOptions
from aiolibtest.models.outcome import Outcome

__all__ = [
    "Event",
    "Outcome",
    "RunOptions",
    "TestDescriptor",
    "TestFinished",
    "TestKind",
    "TestStarted",
    "UnitOfWork",
]
