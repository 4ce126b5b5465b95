"""
Relationship oracle layer: the /people and /places lookups and their pacing.
"""

from .base import RelationshipOracle
from .client import HttpRelationshipOracle
from .models import (
    RESTRICTED_SENTINEL,
    OracleRequest,
    OracleResponse,
    OracleResult,
    decode_oracle_response,
)
from .rate_limiter import FixedIntervalRateLimiter

__all__ = [
    "RelationshipOracle",
    "HttpRelationshipOracle",
    "FixedIntervalRateLimiter",
    "OracleRequest",
    "OracleResponse",
    "OracleResult",
    "RESTRICTED_SENTINEL",
    "decode_oracle_response",
]
