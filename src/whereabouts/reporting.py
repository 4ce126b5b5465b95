import logging
from typing import Optional

import httpx
from pydantic import BaseModel, Field

from whereabouts.exceptions import ReportSubmissionError

logger = logging.getLogger(__name__)


class ReportPayload(BaseModel):
    """Answer submitted to the report endpoint."""
    task: str = Field(..., description="Task identifier")
    apikey: str = Field(..., description="Task API key")
    answer: str = Field(..., min_length=1, description="Discovered location")


class Reporter:
    """Submits the discovered location to the task's /report endpoint."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        task_name: str = "loop",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = f"{base_url.rstrip('/')}/report"
        self.api_key = api_key
        self.task_name = task_name
        self.timeout = timeout
        self._transport = transport

    async def submit(self, location: str) -> str:
        """POST the answer and return the raw response body."""
        payload = ReportPayload(task=self.task_name, apikey=self.api_key, answer=location)
        logger.info(f"Submitting location '{location}' for task '{self.task_name}'")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, json=payload.model_dump())
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Report rejected with HTTP {e.response.status_code}: {e.response.text}")
            raise ReportSubmissionError(f"Report endpoint returned {e.response.status_code}: {e.response.text}")
        except httpx.HTTPError as e:
            logger.error(f"Failed to submit report: {e}")
            raise ReportSubmissionError(f"Report request failed: {e}")

        logger.info(f"Report response: {response.text}")
        return response.text
