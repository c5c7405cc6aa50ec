"""Tests for the descriptor registry."""

import pytest

from aiolibtest.models.outcome import Outcome
from aiolibtest.registry import Registry
from aiolibtest.testing.factories import DescriptorFactory, RecordingWork


def test_preserves_registration_order() -> None:
    """Descriptors iterate in the order they were registered."""
    registry = Registry()
    registry.add_test("b", RecordingWork())
    registry.add_bench("a", RecordingWork())
    registry.add_test("c", RecordingWork(), ignored=True)

    assert [(d.name, d.kind, d.ignored) for d in registry] == [
        ("b", "test", False),
        ("a", "bench", False),
        ("c", "test", True),
    ]
    assert len(registry) == 3


def test_allows_duplicate_names() -> None:
    """Duplicate names are kept as independent descriptors."""
    registry = Registry()
    first = registry.add_test("same", RecordingWork())
    second = registry.add_test("same", RecordingWork())

    assert list(registry) == [first, second]
    assert first.unit_of_work is not second.unit_of_work


def test_decorators_use_function_name() -> None:
    """Decorated coroutine functions are registered under their own name."""
    registry = Registry()

    @registry.test()
    async def addition() -> None:
        assert 1 + 1 == 2

    @registry.bench("custom", ignored=True)
    async def measure() -> Outcome:
        return Outcome.measured(10)

    descriptors = list(registry)
    assert [(d.name, d.kind, d.ignored) for d in descriptors] == [
        ("addition", "test", False),
        ("custom", "bench", True),
    ]
    assert descriptors[0].unit_of_work is addition


def test_add_appends_built_descriptor() -> None:
    """Prebuilt descriptors can be appended directly."""
    registry = Registry()
    descriptor = DescriptorFactory.build(name="prebuilt")

    assert registry.add(descriptor) is descriptor
    assert list(registry) == [descriptor]


def test_rejects_non_callable_work() -> None:
    """A unit of work must be callable."""
    registry = Registry()

    with pytest.raises(TypeError, match="must be callable"):
        registry.add_test("broken", "not callable")  # type: ignore[arg-type]


def test_iteration_is_a_snapshot() -> None:
    """Registering while iterating does not affect the running iteration."""
    registry = Registry()
    registry.add_test("a", RecordingWork())

    for descriptor in registry:
        registry.add_test(descriptor.name + "-copy", RecordingWork())

    assert [d.name for d in registry] == ["a", "a-copy"]


def test_descriptor_kind_label() -> None:
    """Kinds are labelled the way the list output prints them."""
    registry = Registry()
    test = registry.add_test("t", RecordingWork())
    bench = registry.add_bench("b", RecordingWork())

    assert test.kind_label == "test"
    assert bench.kind_label == "benchmark"
    assert bench.is_bench
