"""Selection of registered descriptors according to run options."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Literal

from aiolibtest.models.descriptor import TestDescriptor
from aiolibtest.models.options import RunOptions

log = logging.getLogger(__name__)

Disposition = Literal["run", "skip_ignored", "skip_filter", "skip_kind"]


@dataclass(frozen=True, kw_only=True)
class Selection:
    """A descriptor tagged with its pre-resolved disposition."""

    index: int
    descriptor: TestDescriptor
    disposition: Disposition

    @property
    def runs(self) -> bool:
        """Whether the descriptor's unit of work will be driven."""
        return self.disposition == "run"

    @property
    def is_listed(self) -> bool:
        """Whether the descriptor survives filtering (run or reported ignored)."""
        return self.disposition in ("run", "skip_ignored")


def matches_name(name: str, options: RunOptions) -> bool:
    """Check a name against the positive filters and the skip list."""
    if options.exact_filter is not None and name != options.exact_filter:
        return False
    if options.name_filter is not None and options.name_filter not in name:
        return False
    return not any(skip in name for skip in options.skip)


def resolve_disposition(descriptor: TestDescriptor, options: RunOptions) -> Disposition:
    """Classify one descriptor.

    Kind is checked first, then the name filters and skip list, and finally
    the ignore policy.
    """
    if descriptor.kind not in options.kinds:
        return "skip_kind"

    if not matches_name(descriptor.name, options):
        return "skip_filter"

    if options.run_ignored == "only":
        return "run" if descriptor.ignored else "skip_filter"

    if options.run_ignored == "exclude" and descriptor.ignored:
        return "skip_ignored"

    return "run"


def select_tests(
    descriptors: Iterable[TestDescriptor], options: RunOptions
) -> Sequence[Selection]:
    """Produce the ordered selection for a registry.

    Args:
        descriptors: Registered descriptors, in registration order
        options: Run options providing filters, kinds and the ignore policy

    Returns:
        One selection per descriptor, in registration order

    """
    selections = [
        Selection(
            index=index,
            descriptor=descriptor,
            disposition=resolve_disposition(descriptor, options),
        )
        for index, descriptor in enumerate(descriptors)
    ]
    log.debug(
        "Selected %d of %d descriptor(s) to run",
        sum(1 for selection in selections if selection.runs),
        len(selections),
    )
    return selections
