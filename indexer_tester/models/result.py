"""Models for conformance run results."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

from indexer_tester.errors import IndexerTestError


@dataclass(frozen=True, kw_only=True)
class StepOutcome:
    """Result of a single conformance step."""

    label: str
    status: Literal["success", "failure"]
    duration: float
    message: str | None = None
    error: IndexerTestError | None = field(default=None, repr=False, compare=False)

    @property
    def succeeded(self) -> bool:
        """Whether the step passed."""
        return self.status == "success"


@dataclass(frozen=True, kw_only=True)
class RunResult:
    """Aggregate outcome of a conformance run.

    The run stops at the first failing step, so at most the last outcome
    has failed and ``error`` is that step's error.
    """

    indexer_id: str
    outcomes: Sequence[StepOutcome]
    error: IndexerTestError | None = None

    @property
    def succeeded(self) -> bool:
        """Whether every applicable step passed."""
        return self.error is None
