"""
Whereabouts - Core Library

Locates a target person by expanding people and places breadth-first
through the /people and /places relationship oracles.
"""

from .orchestrator import TaskOrchestrator, TaskResult
from .search import FrontierSearchEngine, SearchOutcome, SearchStatus

__all__ = [
    'TaskOrchestrator',
    'TaskResult',
    'FrontierSearchEngine',
    'SearchOutcome',
    'SearchStatus',
]
