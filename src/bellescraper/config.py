"""Configuration system for bellescraper.

Uses pydantic-settings to load configuration from environment variables
and .env files with defaults matching the live Belle Property site.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Scraper settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Environment variables are prefixed with BELLE_ (e.g., BELLE_REQUEST_DELAY).
    """

    model_config = SettingsConfigDict(
        env_prefix="BELLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Target site
    base_url: str = Field(
        default="https://www.belleproperty.com",
        description="Origin used to absolutise relative listing links",
    )
    listings_url: str = Field(
        default="https://www.belleproperty.com/listings",
        description="Search results endpoint",
    )

    # Pacing and retries
    request_delay: float = Field(
        default=1.0,
        ge=0,
        description="Seconds to wait between page requests",
    )
    retry_delay: float = Field(
        default=1.0,
        ge=0,
        description="Base backoff in seconds, multiplied by the attempt number",
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        description="Maximum fetch attempts per page",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP request timeout in seconds",
    )

    # Request identity
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        ),
        description="Browser User-Agent sent with every request",
    )
    accept_language: str = Field(
        default="en-AU,en;q=0.9",
        description="Accept-Language header sent with every request",
    )


# Singleton instance for easy import
config = Settings()
