"""Append-only registry of tests and benchmarks."""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from aiolibtest.models.descriptor import TestDescriptor, TestKind, UnitOfWork


@dataclass(kw_only=True)
class Registry:
    """Ordered collection of descriptors, in registration order.

    Descriptors are only ever appended; the order in which they are registered
    is the order in which they are selected and reported. Duplicate names are
    allowed and scheduled independently.

    Example::

        registry = Registry()

        @registry.test()
        async def addition() -> None:
            assert 1 + 1 == 2

        registry.add_bench("sum", bench_sum, ignored=True)
    """

    _descriptors: list[TestDescriptor] = field(default_factory=list)

    def __iter__(self) -> Iterator[TestDescriptor]:
        return iter(tuple(self._descriptors))

    def __len__(self) -> int:
        return len(self._descriptors)

    def add(self, descriptor: TestDescriptor) -> TestDescriptor:
        """Append an already built descriptor."""
        self._descriptors.append(descriptor)
        return descriptor

    def add_test(
        self, name: str, work: UnitOfWork, *, ignored: bool = False
    ) -> TestDescriptor:
        """Register a test backed by the given unit of work."""
        return self._register(name, "test", work, ignored)

    def add_bench(
        self, name: str, work: UnitOfWork, *, ignored: bool = False
    ) -> TestDescriptor:
        """Register a benchmark backed by the given unit of work."""
        return self._register(name, "bench", work, ignored)

    def test(
        self, name: str | None = None, *, ignored: bool = False
    ) -> Callable[[UnitOfWork], UnitOfWork]:
        """Register the decorated coroutine function as a test."""
        return self._decorator(name, "test", ignored)

    def bench(
        self, name: str | None = None, *, ignored: bool = False
    ) -> Callable[[UnitOfWork], UnitOfWork]:
        """Register the decorated coroutine function as a benchmark."""
        return self._decorator(name, "bench", ignored)

    def _decorator(
        self, name: str | None, kind: TestKind, ignored: bool
    ) -> Callable[[UnitOfWork], UnitOfWork]:
        def register(work: UnitOfWork) -> UnitOfWork:
            self._register(name or work.__name__, kind, work, ignored)
            return work

        return register

    def _register(
        self, name: str, kind: TestKind, work: UnitOfWork, ignored: bool
    ) -> TestDescriptor:
        if not callable(work):
            raise TypeError(f"unit of work for {name!r} must be callable")
        return self.add(
            TestDescriptor(name=name, kind=kind, ignored=ignored, unit_of_work=work)
        )
