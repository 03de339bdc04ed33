import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ConfigurationError

DEFAULT_BASE_URL = "https://finnhub.io/api/v1"
DEFAULT_TIMEOUT_SECONDS = 30.0

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    service_name: str = "finnhub-tools"
    environment: str = "dev"
    host: str = "127.0.0.1"
    port: int = 8000


class APIConfig(BaseModel):
    """Connection settings for the upstream Finnhub REST API.

    Built once at startup and passed explicitly to every tool; never mutated
    afterwards.
    """
    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_BASE_URL
    api_token: Optional[str] = None       # Carried for completeness, no endpoint attaches it
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    encode_query_values: bool = False     # Percent-encode query keys/values instead of passing them verbatim

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_env(cls) -> "APIConfig":
        """Build config from FINNHUB_* environment variables.

        Raises:
            ConfigurationError: If FINNHUB_TIMEOUT_SECONDS is not a number
        """
        raw_timeout = os.getenv("FINNHUB_TIMEOUT_SECONDS")
        timeout = DEFAULT_TIMEOUT_SECONDS
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid FINNHUB_TIMEOUT_SECONDS: {raw_timeout!r}",
                    details={"variable": "FINNHUB_TIMEOUT_SECONDS"}
                ) from e

        return cls(
            base_url=os.getenv("FINNHUB_BASE_URL", DEFAULT_BASE_URL),
            api_token=os.getenv("FINNHUB_API_TOKEN") or None,
            timeout_seconds=timeout,
            encode_query_values=os.getenv("FINNHUB_ENCODE_QUERY_VALUES", "").strip().lower() in _TRUTHY,
        )


settings = Settings()
