"""Configuration management for BANKRANK.

Loads provider endpoints and pipeline tuning from environment variables
using Pydantic. No credentials are needed: both providers are public.

Usage:
    from bankrank.config import settings

    print(settings.http_timeout)
    print(settings.metric_min_billions, settings.metric_max_billions)
"""

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """BANKRANK configuration from environment variables.

    Loads from .env file automatically. Validates on instantiation.

    Attributes:
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR)
        http_timeout: Per-request timeout in seconds
        http_max_retries: Retries on transient HTTP failures
        http_rate_limit: Requests/second per provider client
        user_agent: User-Agent header sent to every provider
        token_terminal_api_url: Base URL of the Token Terminal metrics API
        token_terminal_web_url: Base URL of the Token Terminal web explorer
        project_id: Token Terminal project whose net deposits are ranked
        fed_base_url: Base URL of the Federal Reserve site
        fed_report_path: Path of the Large Commercial Banks release
        metric_fallback_millions: Static net deposits fallback (millions USD)
        metric_min_billions: Lower bound for a plausible scraped value
        metric_max_billions: Upper bound for a plausible scraped value
        window_radius: Ranks shown on each side of the inserted entity
        inserted_name: Display name of the inserted entity
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown env vars
    )

    # System Settings
    log_level: str = Field(default="INFO", description="Logging level")

    # HTTP
    http_timeout: float = Field(default=10.0, gt=0, description="Request timeout (seconds)")
    http_max_retries: int = Field(default=1, ge=0, le=5, description="Retries on transient errors")
    http_rate_limit: int = Field(default=5, ge=1, description="Requests/second per client")
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
        ),
        description="User-Agent header for provider requests",
    )

    # Metric provider (Token Terminal)
    token_terminal_api_url: str = Field(
        default="https://api.tokenterminal.com/v2",
        description="Token Terminal API base URL",
    )
    token_terminal_web_url: str = Field(
        default="https://tokenterminal.com",
        description="Token Terminal explorer base URL",
    )
    project_id: str = Field(default="aave", min_length=1, description="Token Terminal project id")

    # Report provider (Federal Reserve LBR release)
    fed_base_url: str = Field(
        default="https://www.federalreserve.gov",
        description="Federal Reserve base URL",
    )
    fed_report_path: str = Field(
        default="/releases/lbr/current/",
        description="Large Commercial Banks release path",
    )

    # Metric sanity bounds
    metric_fallback_millions: int = Field(
        default=68300,
        gt=0,
        description="Static net deposits fallback in millions USD ($68.3B)",
    )
    metric_min_billions: float = Field(default=10.0, ge=0, description="Plausible lower bound (B)")
    metric_max_billions: float = Field(default=500.0, gt=0, description="Plausible upper bound (B)")

    # Ranking
    window_radius: int = Field(default=5, ge=0, description="Ranks shown around the inserted entity")
    inserted_name: str = Field(default="AAVE", min_length=1, description="Inserted entity label")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid:
            raise ValueError(f"log_level must be one of {valid}, got {v}")
        return v_upper

    @model_validator(mode="after")
    def validate_metric_range(self) -> "Settings":
        """Ensure the plausible metric range is not empty."""
        if self.metric_min_billions >= self.metric_max_billions:
            raise ValueError(
                "metric_min_billions must be below metric_max_billions "
                f"({self.metric_min_billions} >= {self.metric_max_billions})"
            )
        return self


# Global settings instance, loaded once at import
settings = Settings()
