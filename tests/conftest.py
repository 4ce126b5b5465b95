"""
Pytest configuration and shared fixtures for the whereabouts tests.
"""

import asyncio
import logging
from typing import Callable, Dict, List, Optional, Tuple, Union

import pytest

from whereabouts.oracle import FixedIntervalRateLimiter, OracleResponse, OracleResult, RelationshipOracle
from whereabouts.oracle.models import TRANSPORT_ERROR, to_result

# Configure logging for tests
logging.basicConfig(level=logging.INFO)

Reply = Union[str, OracleResult]


class FakeOracle(RelationshipOracle):
    """
    In-memory oracle over a fixed graph.

    Replies are raw message strings (decoded exactly like a code-0 HTTP reply)
    or ready-made OracleResults. Unknown keys come back as "no data".
    """

    def __init__(
        self,
        people: Optional[Dict[str, Reply]] = None,
        places: Optional[Dict[str, Reply]] = None,
        delay: float = 0.0,
    ):
        self.people = people or {}
        self.places = places or {}
        self.delay = delay
        self.calls: List[Tuple[str, str]] = []

    async def query_people(self, name: str) -> OracleResult:
        return await self._reply("people", self.people, name)

    async def query_places(self, place: str) -> OracleResult:
        return await self._reply("places", self.places, place)

    async def _reply(self, kind: str, graph: Dict[str, Reply], key: str) -> OracleResult:
        self.calls.append((kind, key))
        if self.delay:
            await asyncio.sleep(self.delay)
        reply = graph.get(key)
        if reply is None:
            return OracleResult.no_data(TRANSPORT_ERROR)
        if isinstance(reply, OracleResult):
            return reply
        return to_result(OracleResponse(code=0, message=reply))

    def queried(self, kind: str) -> List[str]:
        return [key for k, key in self.calls if k == kind]


class EndlessOracle(RelationshipOracle):
    """Every lookup reveals one brand-new entity, so the graph never runs out."""

    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self.calls: List[Tuple[str, str]] = []

    async def query_people(self, name: str) -> OracleResult:
        return await self._reply("people", name, "PLACE")

    async def query_places(self, place: str) -> OracleResult:
        return await self._reply("places", place, "PERSON")

    async def _reply(self, kind: str, key: str, prefix: str) -> OracleResult:
        self.calls.append((kind, key))
        if self.delay:
            await asyncio.sleep(self.delay)
        return to_result(OracleResponse(code=0, message=f"{prefix}{len(self.calls)}"))


class CountingRateLimiter(FixedIntervalRateLimiter):
    """Rate limiter that never sleeps but records how often it was asked."""

    def __init__(self):
        super().__init__(interval_seconds=0)
        self.acquired = 0

    async def acquire(self) -> None:
        self.acquired += 1


@pytest.fixture
def make_oracle() -> Callable[..., FakeOracle]:
    """Factory for FakeOracle instances."""
    return FakeOracle


@pytest.fixture
def endless_oracle() -> EndlessOracle:
    return EndlessOracle()


@pytest.fixture
def rate_limiter() -> CountingRateLimiter:
    return CountingRateLimiter()


@pytest.fixture
def scenario_oracle() -> FakeOracle:
    """ADAM knows KRAKOW; KRAKOW is where BARBARA is now. WARSZAWA is a seed place."""
    return FakeOracle(
        people={"ADAM": "KRAKOW"},
        places={
            "WARSZAWA": "ADAM",
            "KRAKOW": "BARBARA TOMASZ",
        },
    )


@pytest.fixture
def slow_endless_oracle() -> EndlessOracle:
    """Endless graph where every lookup takes 20ms."""
    return EndlessOracle(delay=0.02)
