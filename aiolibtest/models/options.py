"""Run options controlling test selection, scheduling and output."""

from pathlib import Path
from typing import Any, Literal

from pydantic import (
    Field,
    ModelWrapValidatorHandler,
    ValidationError,
    field_validator,
    model_validator,
)

from aiolibtest.errors import ConfigurationError
from aiolibtest.models.base import Model
from aiolibtest.models.descriptor import TestKind

RunIgnored = Literal["exclude", "include", "only"]
OutputFormat = Literal["pretty", "terse", "json"]
ColorPolicy = Literal["auto", "always", "never"]


class RunOptions(Model):
    """Validated configuration for one run of the harness.

    Constructing options with invalid values raises ConfigurationError, so a
    malformed configuration is rejected before any test is scheduled.
    """

    name_filter: str | None = Field(
        default=None, description="Run only tests whose name contains this"
    )
    exact_filter: str | None = Field(
        default=None, description="Run only tests whose name equals this"
    )
    skip: tuple[str, ...] = Field(
        default=(), description="Exclude tests whose name contains any entry"
    )
    run_ignored: RunIgnored = Field(
        default="exclude", description="How tests marked ignored are handled"
    )
    kinds: frozenset[TestKind] = Field(
        default=frozenset({"test"}), description="Kinds of descriptors to run"
    )
    test_threads: int | None = Field(
        default=None,
        gt=0,
        description="Maximum number of concurrently driven tests (None: unbounded)",
    )
    format: OutputFormat = Field(default="pretty", description="Output format")
    color: ColorPolicy = Field(default="auto", description="ANSI color policy")
    list_only: bool = Field(
        default=False, description="List tests instead of running them"
    )
    logfile: Path | None = Field(default=None, description="Log file for the host")
    nocapture: bool = Field(
        default=False, description="Do not capture output of units of work"
    )

    @model_validator(mode="wrap")
    @classmethod
    def _wrap_errors(
        cls, data: Any, handler: ModelWrapValidatorHandler["RunOptions"]
    ) -> "RunOptions":
        try:
            return handler(data)
        except ValidationError as exc:
            raise ConfigurationError(format_validation_error(exc)) from exc

    @field_validator("kinds")
    @classmethod
    def _require_kind(cls, value: frozenset[TestKind]) -> frozenset[TestKind]:
        if not value:
            raise ValueError("at least one of test or bench must be selected")
        return value

    @property
    def concurrency_limit(self) -> int | None:
        """Concurrency bound for the scheduler, None when unbounded."""
        return self.test_threads


def format_validation_error(exc: ValidationError) -> str:
    """Render a pydantic validation error as a single line."""
    problems = [
        f"{'.'.join(str(part) for part in error['loc']) or 'options'}: {error['msg']}"
        for error in exc.errors()
    ]
    return "invalid run options: " + "; ".join(problems)
