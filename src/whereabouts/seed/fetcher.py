import logging
from typing import Optional

import httpx

from whereabouts.exceptions import SeedFetchError

logger = logging.getLogger(__name__)


class SeedFetcher:
    """Downloads the plain-text note the search is seeded from."""

    def __init__(self, url: str, timeout: float = 30.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def fetch(self) -> str:
        logger.info(f"Fetching seed note from {self.url}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch seed note: {e}")
            raise SeedFetchError(f"Seed note request failed for '{self.url}': {e}")

        text = response.text
        logger.info(f"Retrieved seed note ({len(text)} characters)")
        logger.debug(f"Seed note content: {text}")
        return text
