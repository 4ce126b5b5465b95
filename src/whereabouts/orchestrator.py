"""
Task orchestration: seed the frontier search, run it, and hand the answer on.
"""
import logging
import time
from typing import Iterable, List, Optional

from pydantic import BaseModel, Field

from whereabouts.config import WhereaboutsConfig
from whereabouts.exceptions import (
    ConfigurationError,
    InvalidSeedError,
    SearchAbortedError,
    SearchExhaustedError,
    TaskStepError,
    WhereaboutsException,
)
from whereabouts.oracle import FixedIntervalRateLimiter, RelationshipOracle
from whereabouts.reporting import Reporter
from whereabouts.search import FrontierSearchEngine, SearchOutcome, SearchStatus
from whereabouts.seed import SeedEntities, SeedExtractor, SeedFetcher

logger = logging.getLogger(__name__)


class TaskResult(BaseModel):
    """Summary of a complete fetch -> extract -> search -> report run."""
    response: Optional[str] = Field(None, description="Body returned by the report endpoint")
    location: str = Field(..., description="Where the target was found")
    total_requests: int = Field(..., description="Oracle calls issued by the search")
    processing_time: float = Field(..., description="Seconds spent on the whole pipeline")
    original_places: List[str] = Field(default_factory=list)
    discovered_places: List[str] = Field(default_factory=list)


class TaskOrchestrator:
    """
    Wires the seed collaborators, the search engine and the reporter.

    Retries are not attempted here; pacing lives in the engine's rate limiter.
    """

    def __init__(
        self,
        engine: FrontierSearchEngine,
        reporter: Optional[Reporter] = None,
        fetcher: Optional[SeedFetcher] = None,
        extractor: Optional[SeedExtractor] = None,
    ):
        self.engine = engine
        self.reporter = reporter
        self.fetcher = fetcher
        self.extractor = extractor
        self.last_outcome: Optional[SearchOutcome] = None

    @classmethod
    def from_config(
        cls,
        config: WhereaboutsConfig,
        oracle: RelationshipOracle,
        with_seed: bool = True,
        with_reporter: bool = True,
    ) -> "TaskOrchestrator":
        """Build an orchestrator around an already opened oracle."""
        engine = FrontierSearchEngine(
            oracle=oracle,
            rate_limiter=FixedIntervalRateLimiter(config.rate_limit_interval),
            target_name=config.target_name,
            max_requests=config.max_requests,
            deadline_seconds=config.deadline_seconds,
            dedupe_queued=config.dedupe_queued,
        )
        reporter = None
        if with_reporter:
            reporter = Reporter(
                base_url=config.base_url,
                api_key=config.require_api_key(),
                task_name=config.task_name,
                timeout=config.http_timeout,
            )
        fetcher = extractor = None
        if with_seed:
            fetcher = SeedFetcher(config.seed_url, timeout=config.http_timeout)
            extractor = SeedExtractor(model=config.openai_model, temperature=config.openai_temperature)
        return cls(engine, reporter=reporter, fetcher=fetcher, extractor=extractor)

    async def run(
        self,
        seed_people: Iterable[str],
        seed_places: Iterable[str],
        target_name: Optional[str] = None,
    ) -> str:
        """
        Search for the target and return the place it was found in.

        The location is forwarded to the reporter when one is configured.

        Raises:
            InvalidSeedError: If neither people nor places were supplied.
            SearchExhaustedError: If the explored graph holds no answer.
            SearchAbortedError: If the request budget or deadline ran out.
        """
        location = await self.locate(seed_people, seed_places, target_name)
        if self.reporter:
            await self.reporter.submit(location)
        return location

    async def locate(
        self,
        seed_people: Iterable[str],
        seed_places: Iterable[str],
        target_name: Optional[str] = None,
    ) -> str:
        """Run the search and translate its terminal state into a location or an error."""
        outcome = await self.engine.search(seed_people, seed_places, target_name)
        self.last_outcome = outcome

        if outcome.status is SearchStatus.FOUND and outcome.location:
            return outcome.location
        if outcome.status is SearchStatus.EXHAUSTED:
            raise SearchExhaustedError(
                f"'{outcome.target}' not found after {outcome.request_count} requests; "
                f"both frontiers are empty"
            )
        if outcome.status is SearchStatus.ABORTED:
            raise SearchAbortedError(outcome.abort_reason or "unknown reason")
        raise WhereaboutsException(f"Search ended in unexpected state {outcome.status.value}")

    async def execute(self) -> TaskResult:
        """Run the whole pipeline: fetch the note, extract seeds, search, report."""
        if not self.fetcher or not self.extractor:
            raise ConfigurationError("execute() needs a seed fetcher and extractor")

        started = time.time()
        logger.info("Starting search task")

        text = await self._step("fetch_seed", self.fetcher.fetch())
        seeds = await self._step("extract_seed", self._extract_seeds(text))
        logger.info(f"Parsed {len(seeds.names)} names and {len(seeds.places)} places from the note")

        location = await self._step("search", self.locate(seeds.names, seeds.places))

        response = None
        if self.reporter:
            response = await self._step("submit_report", self.reporter.submit(location))

        outcome = self.last_outcome
        return TaskResult(
            response=response,
            location=location,
            total_requests=outcome.request_count if outcome else 0,
            processing_time=time.time() - started,
            original_places=seeds.places,
            discovered_places=outcome.discovered_places if outcome else [],
        )

    async def _extract_seeds(self, text: str) -> SeedEntities:
        seeds = await self.extractor.extract(text)
        if seeds.is_empty:
            raise InvalidSeedError("Seed note mentions no people or places")
        return seeds

    async def _step(self, step: str, awaitable):
        try:
            return await awaitable
        except WhereaboutsException as e:
            logger.error(f"Task failed at step {step}: {e.message}")
            raise TaskStepError(step, e) from e
