"""
Wire and result models for the people/places relationship oracles.
"""

import json
from typing import List

from pydantic import BaseModel, Field, ValidationError

from whereabouts.exceptions import OracleResponseError
from whereabouts.utils.text_helpers import normalize

RESTRICTED_SENTINEL = "[**RESTRICTED DATA**]"

# Local status codes for replies that never produced a usable oracle code.
TRANSPORT_ERROR = -1
DECODE_ERROR = -2


class OracleRequest(BaseModel):
    """Request body accepted by both /people and /places."""
    apikey: str = Field(..., description="Task API key")
    query: str = Field(..., min_length=1, description="Normalized person or place name")


class OracleResponse(BaseModel):
    """Raw reply from an oracle endpoint."""
    code: int = Field(..., description="Zero on success, anything else means no usable data")
    message: str = Field("", description="Space separated names, a sentinel, or empty")


class OracleResult(BaseModel):
    """Decoded oracle reply handed to the search engine."""
    items: List[str] = Field(default_factory=list, description="Normalized related entities of the opposite type")
    status_code: int = Field(0, description="Oracle code, or a negative local failure code")
    message: str = Field("", description="Raw message text, kept for the stop condition")

    @property
    def usable(self) -> bool:
        return bool(self.items)

    @classmethod
    def no_data(cls, status_code: int, message: str = "") -> "OracleResult":
        return cls(items=[], status_code=status_code, message=message)


def has_usable_data(response: OracleResponse) -> bool:
    message = response.message.strip()
    return response.code == 0 and bool(message) and message != RESTRICTED_SENTINEL


def to_result(response: OracleResponse) -> OracleResult:
    """Split a successful reply into normalized items; anything else carries none."""
    if not has_usable_data(response):
        return OracleResult.no_data(response.code, response.message)
    items = [normalize(token) for token in response.message.split()]
    return OracleResult(items=items, status_code=response.code, message=response.message)


def decode_oracle_response(body: str) -> OracleResult:
    """
    Decode a raw oracle body into an OracleResult.

    Raises:
        OracleResponseError: If the body is not JSON or lacks the expected shape.
    """
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as e:
        raise OracleResponseError(f"Oracle reply is not valid JSON: {e}")
    try:
        response = OracleResponse.model_validate(payload)
    except ValidationError as e:
        raise OracleResponseError(f"Unexpected oracle reply shape: {e.errors()}")
    return to_result(response)
