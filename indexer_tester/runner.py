"""Execution of a single conformance step."""

import logging
import sys
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TextIO

from indexer_tester.errors import IndexerTestError
from indexer_tester.models.result import StepOutcome

log = logging.getLogger(__name__)

SUCCESS_MARKER = "SUCCESS ✓"
FAILURE_MARKER = "FAILURE ✗"


@dataclass(kw_only=True)
class StepRunner:
    """Runs steps one at a time, timing them and writing a status line each.

    Errors are only decorated in the output: the original exception is
    recorded in the returned outcome unchanged.
    """

    output: TextIO | None = None
    outcomes: list[StepOutcome] = field(default_factory=list)

    def write(self, text: str) -> None:
        """Write text to the output sink (standard output by default)."""
        stream = self.output if self.output is not None else sys.stdout
        stream.write(text)
        stream.flush()

    async def run(
        self,
        label: str,
        step: Callable[[], Awaitable[object]],
        *args: object,
    ) -> StepOutcome:
        """Run a step and record its outcome.

        Args:
            label: Step label, %-interpolated with ``args``
            step: Coroutine function performing the step
            args: Values interpolated into the label

        Returns:
            Outcome of the step; a failed outcome carries the raised error

        """
        label = label % args if args else label
        self.write(f"  {label} ")

        start = time.monotonic()
        error: IndexerTestError | None = None
        try:
            await step()
        except IndexerTestError as exc:
            error = exc
        duration = time.monotonic() - start

        marker = SUCCESS_MARKER if error is None else FAILURE_MARKER
        self.write(f"{marker} in {format_duration(duration)}\n")

        outcome = StepOutcome(
            label=label,
            status="success" if error is None else "failure",
            duration=duration,
            message=None if error is None else str(error),
            error=error,
        )
        log.debug("Step %r finished: %s (%.3fs)", label, outcome.status, duration)
        self.outcomes.append(outcome)
        return outcome


def format_duration(seconds: float) -> str:
    """Format an elapsed duration for status lines."""
    if seconds < 1:
        return f"{seconds * 1000:.1f}ms"
    return f"{seconds:.2f}s"
