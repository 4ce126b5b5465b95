"""
LLM-backed extraction of first names and city names from the seed note.
"""
import json
import logging
from typing import Optional

from openai import OpenAI, OpenAIError
from pydantic import ValidationError

from whereabouts.exceptions import ExtractionError

from .models import SeedEntities

logger = logging.getLogger(__name__)

EXTRACTION_SYSTEM_PROMPT = (
    "You are an expert text analyzer. Extract ALL first names of people and ALL Polish city names "
    "from the given text.\n\n"
    "RULES:\n"
    "1. Extract every person's first name mentioned in the text (first names only)\n"
    "2. Extract every city name mentioned in the text\n"
    "3. Remove diacritics (ą→a, ę→e, ś→s, ć→c, ł→l, ń→n, ó→o, ź→z, ż→z)\n"
    "4. Convert all names and cities to UPPERCASE\n"
    "5. Return only unique entries (no duplicates)\n\n"
    "Return the result as JSON in this exact format:\n"
    '{"names": ["NAME1", "NAME2"], "cities": ["CITY1", "CITY2"]}\n'
)


class SeedExtractor:
    """Turns the free-text note into seed people and places."""

    def __init__(self, model: str = "gpt-4o-mini", temperature: float = 0.3, client: Optional[OpenAI] = None):
        self.model = model
        self.temperature = temperature
        self.client = client or OpenAI()  # Assumes OPENAI_API_KEY is set in environment

    async def extract(self, text: str) -> SeedEntities:
        """
        Extract and normalize the names and cities mentioned in `text`.

        Raises:
            ExtractionError: If the model call fails or its reply is not the expected JSON.
        """
        logger.info("Extracting names and cities from seed note")
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": EXTRACTION_SYSTEM_PROMPT},
                    {"role": "user", "content": f"Extract all first names and cities from this text:\n\n{text}"},
                ],
            )
        except OpenAIError as e:
            logger.error(f"Extraction request failed: {e}")
            raise ExtractionError(f"Extraction request failed: {e}")

        content = response.choices[0].message.content or ""
        logger.debug(f"Extraction reply: {content}")
        return self.parse(content)

    @staticmethod
    def parse(content: str) -> SeedEntities:
        try:
            seeds = SeedEntities.model_validate(json.loads(content))
        except (json.JSONDecodeError, ValidationError) as e:
            raise ExtractionError(f"Could not parse extraction reply: {e}")

        logger.info(f"Extracted names={seeds.names}, places={seeds.places}")
        return seeds
