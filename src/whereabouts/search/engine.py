"""
Frontier search over the people/places graph.

The graph is never materialized: edges are discovered one oracle call at a
time. Two FIFO queues are serviced round-robin (one person, then one place)
so that neither side starves and the traversal stays breadth-first.
"""
import logging
import time
from collections import deque
from typing import Deque, Iterable, Optional, Set

from whereabouts.exceptions import InvalidSeedError
from whereabouts.oracle import FixedIntervalRateLimiter, RelationshipOracle
from whereabouts.utils.text_helpers import contains_token, normalize, normalize_all

from .models import Entity, EntityType, SearchOutcome, SearchState, SearchStatus

logger = logging.getLogger(__name__)

BUDGET_EXCEEDED = "request budget exceeded"
DEADLINE_EXCEEDED = "deadline exceeded"


class FrontierSearchEngine:
    """
    Locates the place where a target person currently is.

    The search stops at the first place whose /places reply mentions the
    target, unless that place was already known from the seed data: the
    target is tied to at least one seed place by construction, so those
    matches are ignored.
    """

    def __init__(
        self,
        oracle: RelationshipOracle,
        rate_limiter: Optional[FixedIntervalRateLimiter] = None,
        target_name: str = "BARBARA",
        max_requests: int = 1000,
        deadline_seconds: Optional[float] = None,
        dedupe_queued: bool = False,
    ):
        """
        Args:
            oracle: Source of people -> places and places -> people edges.
            rate_limiter: Paces oracle calls. Defaults to 5 requests/second.
            target_name: Name whose appearance in a /places reply ends the search.
            max_requests: Hard ceiling on oracle calls for one run.
            deadline_seconds: Wall-clock budget for one run, None for no limit.
            dedupe_queued: Also skip names already waiting in a queue, instead of
                only collapsing repeats when they are dequeued.
        """
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        self.oracle = oracle
        self.rate_limiter = rate_limiter or FixedIntervalRateLimiter()
        self.target_name = normalize(target_name)
        self.max_requests = max_requests
        self.deadline_seconds = deadline_seconds
        self.dedupe_queued = dedupe_queued

    def initialize(
        self,
        seed_people: Iterable[str],
        seed_places: Iterable[str],
        target_name: Optional[str] = None,
    ) -> SearchState:
        """Build the initial state from the seed names and places."""
        names = normalize_all(seed_people)
        places = normalize_all(seed_places)
        if not names and not places:
            raise InvalidSeedError("Search needs at least one seed person or place")

        target = normalize(target_name.strip()) if target_name else self.target_name
        if not target:
            raise InvalidSeedError("Target name must not be empty")

        return SearchState(
            name_queue=deque(names),
            place_queue=deque(places),
            start_places=frozenset(places),
            target=target,
        )

    async def search(
        self,
        seed_people: Iterable[str],
        seed_places: Iterable[str],
        target_name: Optional[str] = None,
    ) -> SearchOutcome:
        """
        Run the search to a terminal state.

        Args:
            seed_people: Names known before the search starts.
            seed_places: Places known before the search starts. These never satisfy
                the stop condition.
            target_name: Overrides the engine's target for this run.

        Returns:
            SearchOutcome with status FOUND, EXHAUSTED or ABORTED.

        Raises:
            InvalidSeedError: If there is nothing to expand.
        """
        state = self.initialize(seed_people, seed_places, target_name)
        started = time.monotonic()
        deadline = started + self.deadline_seconds if self.deadline_seconds is not None else None

        logger.info(f"Searching for '{state.target}': names={list(state.name_queue)}, "
                    f"places={list(state.place_queue)}")

        while state.status is SearchStatus.RUNNING:
            if not state.name_queue and not state.place_queue:
                if self._past_deadline(deadline):
                    self._abort(state, DEADLINE_EXCEEDED)
                else:
                    state.status = SearchStatus.EXHAUSTED
                break

            if state.name_queue:
                await self._expand_name(state, deadline)

            if state.status is SearchStatus.RUNNING and state.place_queue:
                await self._expand_place(state, deadline)

        elapsed = time.monotonic() - started
        self._log_outcome(state, elapsed)
        return SearchOutcome.from_state(state, elapsed)

    async def _expand_name(self, state: SearchState, deadline: Optional[float]):
        name = state.name_queue.popleft()
        if name in state.visited_names:
            logger.debug(f"Skipping already visited name '{name}'")
            return

        if not self._within_limits(state, deadline):
            state.name_queue.appendleft(name)
            return

        state.visited_names.add(name)
        result = await self._call(state, Entity(name, EntityType.PERSON))

        for place in result.items:
            if self._enqueue(state.place_queue, state.visited_places, place):
                logger.debug(f"Queued place '{place}' (from '{name}')")

    async def _expand_place(self, state: SearchState, deadline: Optional[float]):
        place = state.place_queue.popleft()
        if place in state.visited_places:
            logger.debug(f"Skipping already visited place '{place}'")
            return

        if not self._within_limits(state, deadline):
            state.place_queue.appendleft(place)
            return

        state.visited_places.add(place)
        result = await self._call(state, Entity(place, EntityType.PLACE))

        if contains_token(result.message, state.target):
            if place not in state.start_places:
                logger.info(f"'{state.target}' found in '{place}'")
                state.status = SearchStatus.FOUND
                state.location = place
                return
            logger.info(f"'{state.target}' mentioned in seed place '{place}' - ignoring")

        for name in result.items:
            if self._enqueue(state.name_queue, state.visited_names, name):
                logger.debug(f"Queued name '{name}' (from '{place}')")

    async def _call(self, state: SearchState, entity: Entity):
        await self.rate_limiter.acquire()
        state.request_count += 1
        state.queries.append(entity)
        if entity.type is EntityType.PERSON:
            return await self.oracle.query_people(entity.key)
        return await self.oracle.query_places(entity.key)

    def _enqueue(self, queue: Deque[str], visited: Set[str], key: str) -> bool:
        if key in visited:
            return False
        if self.dedupe_queued and key in queue:
            return False
        queue.append(key)
        return True

    def _within_limits(self, state: SearchState, deadline: Optional[float]) -> bool:
        """Check the budget and deadline before spending another oracle call."""
        if state.request_count >= self.max_requests:
            self._abort(state, BUDGET_EXCEEDED)
            return False
        if self._past_deadline(deadline):
            self._abort(state, DEADLINE_EXCEEDED)
            return False
        return True

    @staticmethod
    def _past_deadline(deadline: Optional[float]) -> bool:
        return deadline is not None and time.monotonic() >= deadline

    def _abort(self, state: SearchState, reason: str):
        logger.warning(f"Aborting search after {state.request_count} requests: {reason}")
        state.status = SearchStatus.ABORTED
        state.abort_reason = reason

    def _log_outcome(self, state: SearchState, elapsed: float):
        if state.status is SearchStatus.FOUND:
            logger.info(f"Search finished in {elapsed:.2f}s after {state.request_count} requests: "
                        f"'{state.target}' is in '{state.location}'")
        else:
            logger.warning(f"Search ended {state.status.value} in {elapsed:.2f}s after "
                           f"{state.request_count} requests")
        logger.info(f"Discovered places: {state.discovered_places}")
