"""Conformance test sequence for a single indexer."""

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import TextIO

from pydantic import Field

from indexer_tester.adapters.base import Indexer
from indexer_tester.errors import (
    ConfigMissingError,
    IndexerTestError,
    LoginFailedError,
    RatioFailedError,
    SearchFailedError,
    UnexpectedResultsError,
    reraise_as,
)
from indexer_tester.models.base import Model
from indexer_tester.models.query import (
    CATEGORY_TV_HD,
    CATEGORY_TV_SD,
    SEARCH_MODE_TV,
    Query,
    SearchMode,
)
from indexer_tester.models.result import RunResult
from indexer_tester.runner import StepRunner
from indexer_tester.validator import assert_valid_results

log = logging.getLogger(__name__)

SEARCH_MODE_LIMIT = 3
NO_MATCH_SERIES = "nothingshouldmatchtheseresults"


class TesterOptions(Model):
    """Options controlling a conformance run."""

    __test__ = False

    download: bool = Field(
        default=False, description="Fetch every non-magnet result link"
    )


@dataclass(frozen=True, kw_only=True)
class IndexerTester:
    """Runs the conformance sequence against one indexer.

    Steps run in a fixed order: config check and login (only when the
    indexer requires login), one probe per search mode, the empty result
    probe, then the ratio probe. The run stops at the first failing step.
    """

    __test__ = False

    indexer: Indexer
    options: TesterOptions = field(default_factory=TesterOptions)
    output: TextIO | None = None
    logger: logging.Logger = field(default=log, repr=False)

    async def run(self) -> RunResult:
        """Run every applicable step and return the outcome of the run."""
        runner = StepRunner(output=self.output)
        info = await self.indexer.info()
        runner.write(f"→ Testing indexer {info.id} at {info.link}\n")
        self.logger.info("Testing indexer %s at %s", info.id, info.link)

        error = await self._run_steps(runner)

        if error is not None:
            runner.write(f"→ Indexer {info.id} FAILED with {error}\n")
            self.logger.info("Indexer %s failed: %s", info.id, error)
        else:
            runner.write(f"→ Indexer {info.id} is OK\n")
            self.logger.info("Indexer %s passed", info.id)

        return RunResult(indexer_id=info.id, outcomes=runner.outcomes, error=error)

    async def _run_steps(self, runner: StepRunner) -> IndexerTestError | None:
        if self.indexer.requires_login:
            outcome = await runner.run(
                "Testing required config is available", self._check_config
            )
            if not outcome.succeeded:
                return outcome.error

            outcome = await runner.run(
                "Testing login with valid credentials", self._login
            )
            if not outcome.succeeded:
                return outcome.error

        capabilities = await self.indexer.capabilities()
        for mode in capabilities.search_modes:
            outcome = await runner.run(
                "Testing search mode %r",
                partial(self._probe_search_mode, mode),
                mode.key,
            )
            if not outcome.succeeded:
                return outcome.error

        outcome = await runner.run(
            "Testing empty results are handled", self._probe_empty_results
        )
        if not outcome.succeeded:
            return outcome.error

        outcome = await runner.run("Testing ratio", self._probe_ratio)
        if not outcome.succeeded:
            return outcome.error

        return None

    async def _check_config(self) -> None:
        with reraise_as(ConfigMissingError):
            await self.indexer.check_has_config()

    async def _login(self) -> None:
        with reraise_as(LoginFailedError):
            await self.indexer.login()

    async def _probe_search_mode(self, mode: SearchMode) -> None:
        query = Query(type=mode.key, limit=SEARCH_MODE_LIMIT)
        if mode.key == SEARCH_MODE_TV:
            query = query.model_copy(
                update={"categories": (CATEGORY_TV_HD, CATEGORY_TV_SD)}
            )

        with reraise_as(SearchFailedError):
            results = await self.indexer.search(query)

        self.logger.debug(
            "Search mode %s returned %d result(s)", mode.key, len(results)
        )
        await assert_valid_results(
            results, self.indexer, download=self.options.download
        )

    async def _probe_empty_results(self) -> None:
        with reraise_as(SearchFailedError):
            results = await self.indexer.search(Query(series=NO_MATCH_SERIES))

        if results:
            raise UnexpectedResultsError(len(results))

    async def _probe_ratio(self) -> None:
        with reraise_as(RatioFailedError):
            ratio = await self.indexer.ratio()

        self.logger.debug("Ratio returned %s", ratio)


async def run_conformance(
    indexer: Indexer,
    options: TesterOptions | None = None,
    output: TextIO | None = None,
    logger: logging.Logger | None = None,
) -> RunResult:
    """Run the conformance sequence against an indexer.

    Args:
        indexer: Indexer under test
        options: Run options (defaults to no download checks)
        output: Sink for progress lines (defaults to standard output)
        logger: Logger for diagnostics (defaults to this module's logger)

    Returns:
        Outcome of the run; ``error`` holds the first failure, if any

    """
    tester = IndexerTester(
        indexer=indexer,
        options=options or TesterOptions(),
        output=output,
        logger=logger or log,
    )
    return await tester.run()
