from abc import ABC, abstractmethod

from .models import OracleResult


class RelationshipOracle(ABC):
    """
    Abstract base class for the two relationship lookups.

    Implementations must never raise for a failed lookup: transport and
    decode failures come back as an OracleResult without items.
    """

    @abstractmethod
    async def query_people(self, name: str) -> OracleResult:
        """Return the places related to a person."""
        pass

    @abstractmethod
    async def query_places(self, place: str) -> OracleResult:
        """Return the people related to a place."""
        pass
