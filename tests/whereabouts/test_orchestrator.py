"""
Tests for TaskOrchestrator: terminal-state mapping and the full pipeline.
"""

from typing import List

import pytest

from whereabouts.config import WhereaboutsConfig
from whereabouts.exceptions import (
    ConfigurationError,
    ExtractionError,
    InvalidSeedError,
    SearchAbortedError,
    SearchExhaustedError,
    TaskStepError,
)
from whereabouts.orchestrator import TaskOrchestrator, TaskResult
from whereabouts.search import BUDGET_EXCEEDED, FrontierSearchEngine
from whereabouts.seed import SeedEntities


class RecordingReporter:
    def __init__(self):
        self.submitted: List[str] = []

    async def submit(self, location: str) -> str:
        self.submitted.append(location)
        return '{"code": 0, "message": "OK"}'


class StaticFetcher:
    async def fetch(self) -> str:
        return "Adam spotkał Barbarę w Warszawie."


class StaticExtractor:
    def __init__(self, seeds: SeedEntities = None, error: Exception = None):
        self.seeds = seeds
        self.error = error

    async def extract(self, text: str) -> SeedEntities:
        if self.error:
            raise self.error
        return self.seeds


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


def orchestrator_for(oracle, rate_limiter, **kwargs) -> TaskOrchestrator:
    engine = FrontierSearchEngine(oracle=oracle, rate_limiter=rate_limiter, max_requests=kwargs.pop("max_requests", 1000))
    return TaskOrchestrator(engine, **kwargs)


@pytest.mark.unit
class TestRun:

    @pytest.mark.asyncio
    async def test_returns_and_reports_location(self, scenario_oracle, rate_limiter, reporter):
        orchestrator = orchestrator_for(scenario_oracle, rate_limiter, reporter=reporter)

        location = await orchestrator.run(["ADAM"], ["WARSZAWA"], "BARBARA")

        assert location == "KRAKOW"
        assert reporter.submitted == ["KRAKOW"]
        assert orchestrator.last_outcome.request_count == 3

    @pytest.mark.asyncio
    async def test_runs_without_reporter(self, scenario_oracle, rate_limiter):
        orchestrator = orchestrator_for(scenario_oracle, rate_limiter)

        assert await orchestrator.run(["ADAM"], ["WARSZAWA"]) == "KRAKOW"

    @pytest.mark.asyncio
    async def test_exhausted_search_raises(self, make_oracle, rate_limiter, reporter):
        orchestrator = orchestrator_for(make_oracle(), rate_limiter, reporter=reporter)

        with pytest.raises(SearchExhaustedError, match="not found"):
            await orchestrator.run(["ADAM"], ["WARSZAWA"])
        assert reporter.submitted == []

    @pytest.mark.asyncio
    async def test_aborted_search_raises_with_reason(self, endless_oracle, rate_limiter, reporter):
        orchestrator = orchestrator_for(endless_oracle, rate_limiter, reporter=reporter, max_requests=10)

        with pytest.raises(SearchAbortedError) as exc_info:
            await orchestrator.run(["ADAM"], [])

        assert exc_info.value.reason == BUDGET_EXCEEDED
        assert reporter.submitted == []

    @pytest.mark.asyncio
    async def test_empty_seeds_raise(self, make_oracle, rate_limiter):
        orchestrator = orchestrator_for(make_oracle(), rate_limiter)

        with pytest.raises(InvalidSeedError):
            await orchestrator.run([], [])


@pytest.mark.unit
class TestExecute:

    @pytest.mark.asyncio
    async def test_full_pipeline(self, scenario_oracle, rate_limiter, reporter):
        orchestrator = orchestrator_for(
            scenario_oracle,
            rate_limiter,
            reporter=reporter,
            fetcher=StaticFetcher(),
            extractor=StaticExtractor(SeedEntities(names=["Adam"], places=["Warszawa"])),
        )

        result = await orchestrator.execute()

        assert isinstance(result, TaskResult)
        assert result.location == "KRAKOW"
        assert result.total_requests == 3
        assert result.original_places == ["WARSZAWA"]
        assert result.discovered_places == ["KRAKOW"]
        assert result.response == '{"code": 0, "message": "OK"}'
        assert reporter.submitted == ["KRAKOW"]

    @pytest.mark.asyncio
    async def test_failing_step_is_named(self, make_oracle, rate_limiter):
        orchestrator = orchestrator_for(
            make_oracle(),
            rate_limiter,
            fetcher=StaticFetcher(),
            extractor=StaticExtractor(SeedEntities(names=["ADAM"])),
        )

        with pytest.raises(TaskStepError) as exc_info:
            await orchestrator.execute()

        assert exc_info.value.step == "search"
        assert isinstance(exc_info.value.cause, SearchExhaustedError)

    @pytest.mark.asyncio
    async def test_extraction_failure_is_named(self, make_oracle, rate_limiter):
        orchestrator = orchestrator_for(
            make_oracle(),
            rate_limiter,
            fetcher=StaticFetcher(),
            extractor=StaticExtractor(error=ExtractionError("bad JSON")),
        )

        with pytest.raises(TaskStepError, match="extract_seed"):
            await orchestrator.execute()

    @pytest.mark.asyncio
    async def test_empty_seed_note_fails_at_extraction(self, make_oracle, rate_limiter):
        oracle = make_oracle()
        orchestrator = orchestrator_for(
            oracle,
            rate_limiter,
            fetcher=StaticFetcher(),
            extractor=StaticExtractor(SeedEntities(names=["  "], places=[])),
        )

        with pytest.raises(TaskStepError) as exc_info:
            await orchestrator.execute()

        assert exc_info.value.step == "extract_seed"
        assert isinstance(exc_info.value.cause, InvalidSeedError)
        assert oracle.calls == []

    @pytest.mark.asyncio
    async def test_requires_seed_collaborators(self, make_oracle, rate_limiter):
        orchestrator = orchestrator_for(make_oracle(), rate_limiter)

        with pytest.raises(ConfigurationError):
            await orchestrator.execute()


@pytest.mark.unit
def test_from_config_wires_engine_limits(make_oracle):
    config = WhereaboutsConfig(
        api_key="secret",
        target_name="Barbara",
        max_requests=50,
        deadline_seconds=30,
        rate_limit_interval=0,
        dedupe_queued=True,
    )

    orchestrator = TaskOrchestrator.from_config(config, make_oracle(), with_seed=False)

    assert orchestrator.engine.target_name == "BARBARA"
    assert orchestrator.engine.max_requests == 50
    assert orchestrator.engine.deadline_seconds == 30
    assert orchestrator.engine.dedupe_queued is True
    assert orchestrator.engine.rate_limiter.interval == 0
    assert orchestrator.reporter.url == "https://c3ntrala.ag3nts.org/report"
    assert orchestrator.fetcher is None


@pytest.mark.unit
def test_from_config_reporter_needs_api_key(make_oracle):
    with pytest.raises(ConfigurationError):
        TaskOrchestrator.from_config(WhereaboutsConfig(), make_oracle(), with_seed=False)
