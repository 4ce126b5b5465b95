"""
Data models for the people/places frontier search.
"""
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, FrozenSet, List, Optional, Set

from pydantic import BaseModel, Field


class EntityType(Enum):
    PERSON = "person"
    PLACE = "place"


@dataclass(frozen=True)
class Entity:
    """A normalized name tagged with its side of the bipartite graph."""
    key: str
    type: EntityType


class SearchStatus(Enum):
    """Represents the current status of a search run."""
    RUNNING = "running"
    FOUND = "found"
    EXHAUSTED = "exhausted"
    ABORTED = "aborted"


@dataclass
class SearchState:
    """Everything one search run mutates. Owned by a single engine loop."""
    name_queue: Deque[str]
    place_queue: Deque[str]
    start_places: FrozenSet[str]
    target: str
    visited_names: Set[str] = field(default_factory=set)
    visited_places: Set[str] = field(default_factory=set)
    request_count: int = 0
    status: SearchStatus = SearchStatus.RUNNING
    location: Optional[str] = None
    abort_reason: Optional[str] = None
    queries: List[Entity] = field(default_factory=list)  # in the order they were sent

    def __post_init__(self):
        """Ensure queues are deques if passed as lists."""
        if not isinstance(self.name_queue, deque):
            self.name_queue = deque(self.name_queue)
        if not isinstance(self.place_queue, deque):
            self.place_queue = deque(self.place_queue)

    @property
    def discovered_places(self) -> List[str]:
        return sorted(self.visited_places - self.start_places)


class SearchOutcome(BaseModel):
    """Terminal result of a search run."""
    status: SearchStatus = Field(..., description="FOUND, EXHAUSTED or ABORTED")
    target: str = Field(..., description="Normalized name that was searched for")
    location: Optional[str] = Field(None, description="Place where the target was found")
    abort_reason: Optional[str] = Field(None, description="Why the search was aborted")
    request_count: int = Field(0, description="Oracle calls issued during the run")
    start_places: List[str] = Field(default_factory=list, description="Places known before the search")
    discovered_places: List[str] = Field(default_factory=list, description="Visited places not in the start set")
    visited_names: List[str] = Field(default_factory=list)
    queries: List[Entity] = Field(default_factory=list, description="Oracle lookups in the order they were sent")
    elapsed_seconds: float = Field(0.0, description="Wall-clock duration of the run")

    @classmethod
    def from_state(cls, state: SearchState, elapsed_seconds: float) -> "SearchOutcome":
        return cls(
            status=state.status,
            target=state.target,
            location=state.location,
            abort_reason=state.abort_reason,
            request_count=state.request_count,
            start_places=sorted(state.start_places),
            discovered_places=state.discovered_places,
            visited_names=sorted(state.visited_names),
            queries=list(state.queries),
            elapsed_seconds=elapsed_seconds,
        )
