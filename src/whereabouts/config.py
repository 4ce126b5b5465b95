import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from whereabouts.exceptions import ConfigurationError


class WhereaboutsConfig(BaseModel):
    """Runtime settings for the search task."""

    # Task endpoints
    api_key: str = ""
    base_url: str = "https://c3ntrala.ag3nts.org"
    seed_path: str = "/dane/barbara.txt"
    task_name: str = "loop"

    # Extraction model
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.3

    # HTTP / pacing
    http_timeout: float = Field(30.0, gt=0)
    rate_limit_interval: float = Field(0.2, ge=0)  # 5 req/s shared by both oracles

    # Search limits
    target_name: str = "BARBARA"
    max_requests: int = Field(1000, gt=0)
    deadline_seconds: float = Field(600.0, gt=0)
    dedupe_queued: bool = False

    @classmethod
    def from_env(cls) -> "WhereaboutsConfig":
        """Create config from environment variables (and a local .env file)."""
        load_dotenv()
        return cls(
            api_key=os.getenv("AI_DEVS_API_KEY", ""),
            base_url=os.getenv("AI_DEVS_BASE_URL", "https://c3ntrala.ag3nts.org").rstrip("/"),
            seed_path=os.getenv("SEED_PATH", "/dane/barbara.txt"),
            task_name=os.getenv("TASK_NAME", "loop"),
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            openai_temperature=float(os.getenv("OPENAI_TEMPERATURE", "0.3")),
            http_timeout=float(os.getenv("HTTP_TIMEOUT", "30")),
            rate_limit_interval=float(os.getenv("RATE_LIMIT_INTERVAL", "0.2")),
            target_name=os.getenv("TARGET_NAME", "BARBARA"),
            max_requests=int(os.getenv("MAX_REQUESTS", "1000")),
            deadline_seconds=float(os.getenv("SEARCH_DEADLINE", "600")),
            dedupe_queued=os.getenv("DEDUPE_QUEUED", "false").lower() == "true",
        )

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError("AI_DEVS_API_KEY environment variable is required")
        return self.api_key

    @property
    def seed_url(self) -> str:
        return f"{self.base_url}{self.seed_path}"
