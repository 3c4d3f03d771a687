"""Application settings loaded from environment variables.

Defines all environment-driven configuration used by the price search
pipeline and the HTTP API. Every value has a default so the pipeline can run
without an env file.
"""

from typing import Dict, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration model for the application."""

    # Target market
    TARGET_REGION: str = "HK"
    CANONICAL_CURRENCY: str = "HKD"

    # Fixed multipliers into the canonical currency. These go stale, there is
    # no live exchange-rate feed.
    EXCHANGE_RATES: Dict[str, float] = {
        "USD": 7.8,
        "HKD": 1.0,
        "EUR": 8.5,
        "GBP": 9.9,
    }

    # HTTP parameters
    FETCH_TIMEOUT_SECONDS: float = 15
    SEARCH_TIMEOUT_SECONDS: float = 10
    MAX_REDIRECTS: int = 5
    MAX_WORKERS: int = 5

    # Discovery
    SEARCH_ENGINE_URL: str = "https://www.google.com/search"
    SEARCH_RESULTS_LIMIT: int = 5

    # Partner credentials, not wired to any integration yet
    EBAY_APP_ID: Optional[str] = None

    # API parameters
    ROOT_PATH_BACKEND: str = ""
    ALLOWED_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
