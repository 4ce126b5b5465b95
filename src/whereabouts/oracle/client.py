"""
HTTP client for the /people and /places relationship oracles.
Each lookup is exactly one POST; failures are logged and returned as "no data".
"""
import logging
from typing import Optional

import httpx

from whereabouts.exceptions import OracleResponseError

from .base import RelationshipOracle
from .models import (
    DECODE_ERROR,
    TRANSPORT_ERROR,
    OracleRequest,
    OracleResult,
    decode_oracle_response,
)

logger = logging.getLogger(__name__)


class HttpRelationshipOracle(RelationshipOracle):
    """
    Relationship oracle backed by the task's JSON endpoints.

    Use as an async context manager so the underlying httpx client is
    opened and closed around the search.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def query_people(self, name: str) -> OracleResult:
        return await self._query("/people", name)

    async def query_places(self, place: str) -> OracleResult:
        return await self._query("/places", place)

    async def _query(self, endpoint: str, query: str) -> OracleResult:
        if not self.client:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        request = OracleRequest(apikey=self.api_key, query=query)
        logger.info(f"Querying {endpoint} for '{query}'")

        try:
            response = await self.client.post(endpoint, json=request.model_dump())
            body = response.text
            logger.debug(f"{endpoint} raw reply for '{query}': {body}")
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(f"{endpoint} returned HTTP {e.response.status_code} for '{query}': {e.response.text}")
            # error pages are not oracle messages; keep them away from the stop rule
            return OracleResult.no_data(TRANSPORT_ERROR)
        except httpx.HTTPError as e:
            logger.warning(f"{endpoint} request failed for '{query}': {e}")
            return OracleResult.no_data(TRANSPORT_ERROR)

        try:
            result = decode_oracle_response(body)
        except OracleResponseError as e:
            logger.warning(f"{endpoint} reply for '{query}' could not be decoded: {e.message}")
            return OracleResult.no_data(DECODE_ERROR)

        if result.usable:
            logger.info(f"{endpoint} '{query}' -> {result.items}")
        else:
            logger.info(f"{endpoint} '{query}': no usable data (code={result.status_code}, message={result.message!r})")
        return result

    async def close(self):
        """Close the client if not using context manager."""
        if self.client:
            await self.client.aclose()
            self.client = None
