"""Tests for RunOptions validation."""

import pytest
from pydantic import ValidationError

from aiolibtest.errors import ConfigurationError
from aiolibtest.models.options import RunOptions


def test_defaults() -> None:
    """Defaults run every non-ignored test, unbounded, in pretty format."""
    options = RunOptions()

    assert options.name_filter is None
    assert options.exact_filter is None
    assert options.skip == ()
    assert options.run_ignored == "exclude"
    assert options.kinds == frozenset({"test"})
    assert options.concurrency_limit is None
    assert options.format == "pretty"
    assert options.color == "auto"
    assert options.list_only is False


def test_accepts_sets_and_lists() -> None:
    """Kinds and skip entries are normalized to immutable collections."""
    options = RunOptions(kinds={"bench", "test"}, skip=["slow", "net"])

    assert options.kinds == frozenset({"bench", "test"})
    assert options.skip == ("slow", "net")


def test_concurrency_limit_mirrors_test_threads() -> None:
    """The scheduler bound is taken from test_threads."""
    assert RunOptions(test_threads=4).concurrency_limit == 4


@pytest.mark.parametrize("threads", [0, -2])
def test_rejects_non_positive_test_threads(threads: int) -> None:
    """Concurrency limit must be a positive integer."""
    with pytest.raises(ConfigurationError, match="test_threads"):
        RunOptions(test_threads=threads)


def test_rejects_unknown_format() -> None:
    """An unrecognized output format is a configuration error."""
    with pytest.raises(ConfigurationError, match="format"):
        RunOptions(format="xml")


def test_rejects_empty_kinds() -> None:
    """At least one kind of descriptor must be selected."""
    with pytest.raises(ConfigurationError, match="at least one of test or bench"):
        RunOptions(kinds=frozenset())


def test_rejects_unknown_fields() -> None:
    """Misspelled options are not silently ignored."""
    with pytest.raises(ConfigurationError, match="threads"):
        RunOptions(threads=2)


def test_is_immutable() -> None:
    """Options cannot be changed once constructed."""
    options = RunOptions()

    with pytest.raises(ValidationError):
        options.test_threads = 2  # type: ignore[misc]


def test_model_validate_raises_configuration_error() -> None:
    """Validation through pydantic entry points is wrapped the same way."""
    with pytest.raises(ConfigurationError, match="test_threads"):
        RunOptions.model_validate({"test_threads": 0})

    with pytest.raises(ConfigurationError, match="format"):
        RunOptions.model_validate_json('{"format": "xml"}')


def test_model_validate_accepts_valid_data() -> None:
    """Valid mappings and JSON produce the same options as the constructor."""
    expected = RunOptions(kinds={"bench"}, test_threads=2)

    assert RunOptions.model_validate({"kinds": ["bench"], "test_threads": 2}) == (
        expected
    )
    assert RunOptions.model_validate_json(
        '{"kinds": ["bench"], "test_threads": 2}'
    ) == expected
