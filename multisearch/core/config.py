"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support and the MULTISEARCH_ environment prefix. Limits are
validated at load time.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Search settings loaded from environment and .env.

    Every field has a default; validate_limits rejects non-positive
    limits and a default page size above the maximum.
    """

    # App
    app_name: str = "multisearch"
    app_version: str = "1.0.0"
    debug: bool = False

    # Search
    search_default_limit: int = 20
    search_max_limit: int = 100
    search_min_term_length: int = 2
    # None = wait for every branch (no per-branch timeout)
    search_branch_timeout_seconds: float | None = None
    suggestions_max: int = 10

    # History (in-process only, lost on restart)
    history_capacity: int = 100
    history_default_limit: int = 20
    analytics_window_days: int = 30

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MULTISEARCH_",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_limits(self) -> "Settings":
        """Validate page sizes, capacities and the branch timeout."""
        positive = {
            "search_default_limit": self.search_default_limit,
            "search_max_limit": self.search_max_limit,
            "search_min_term_length": self.search_min_term_length,
            "suggestions_max": self.suggestions_max,
            "history_capacity": self.history_capacity,
            "history_default_limit": self.history_default_limit,
            "analytics_window_days": self.analytics_window_days,
        }
        for name, value in positive.items():
            if value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value}")
        if self.search_default_limit > self.search_max_limit:
            raise ValueError(
                "search_default_limit must not exceed search_max_limit "
                f"({self.search_default_limit} > {self.search_max_limit})"
            )
        if (
            self.search_branch_timeout_seconds is not None
            and self.search_branch_timeout_seconds <= 0
        ):
            raise ValueError("search_branch_timeout_seconds must be positive when set")
        if not 0.0 <= self.telemetry_sample_rate <= 1.0:
            raise ValueError("telemetry_sample_rate must be between 0.0 and 1.0")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
