# People/places frontier search

from .engine import BUDGET_EXCEEDED, DEADLINE_EXCEEDED, FrontierSearchEngine
from .models import Entity, EntityType, SearchOutcome, SearchState, SearchStatus

__all__ = [
    "FrontierSearchEngine",
    "BUDGET_EXCEEDED",
    "DEADLINE_EXCEEDED",
    "Entity",
    "EntityType",
    "SearchOutcome",
    "SearchState",
    "SearchStatus",
]
