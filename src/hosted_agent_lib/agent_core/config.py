"""Client configuration loaded from arguments or the environment."""

import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.beta.superagent.sh"


class ClientSettings(BaseModel):
    """
    Connection settings for the hosted agent API.

    Attributes:
        api_key: Bearer token used to authenticate every request.
        base_url: Root URL of the hosted API, without a trailing slash.
        timeout: Request timeout in seconds.
        max_retries: Extra attempts made for retryable failures.
        base_retry_delay: Delay before the first retry; doubled after each attempt.
    """

    api_key: str = Field(min_length=1)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=60.0, gt=0)
    max_retries: int = Field(default=3, ge=0)
    base_retry_delay: float = Field(default=1.0, ge=0)

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_env(cls, env_file: Optional[str | Path] = None) -> "ClientSettings":
        """Build settings from environment variables, loading a .env file first.

        Reads AGENT_API_KEY, AGENT_API_URL, AGENT_API_TIMEOUT and AGENT_API_MAX_RETRIES.

        Args:
            env_file: Explicit .env path. If None, the nearest .env file is used when found.

        Returns:
            The populated settings.

        Raises:
            ValueError: If AGENT_API_KEY is not set.
        """
        path = str(env_file) if env_file is not None else find_dotenv(usecwd=True)
        if path:
            logger.debug(f"Loading environment from '{path}'.")
            load_dotenv(path)

        api_key = os.getenv("AGENT_API_KEY")
        if not api_key:
            msg = "AGENT_API_KEY not found in environment variables."
            logger.error(msg)
            raise ValueError(msg)

        values: dict = {"api_key": api_key}
        if os.getenv("AGENT_API_URL"):
            values["base_url"] = os.getenv("AGENT_API_URL")
        if os.getenv("AGENT_API_TIMEOUT"):
            values["timeout"] = os.getenv("AGENT_API_TIMEOUT")
        if os.getenv("AGENT_API_MAX_RETRIES"):
            values["max_retries"] = os.getenv("AGENT_API_MAX_RETRIES")
        return cls(**values)
