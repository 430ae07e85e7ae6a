"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Firestore credentials are optional so the app (and
tests) can start without a document store; endpoints that need it fail
with DOCUMENT_STORE_NOT_CONFIGURED.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "listing-flow-admin"
    app_version: str = "1.0.0"
    debug: bool = False

    # CORS (admin dashboard origins)
    allowed_origins: str = "http://localhost:3000"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # Firebase / Firestore: use key (env) or path (file). For Vercel, use key.
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None  # Path to JSON file

    # Collections
    flows_collection: str = "product_flows"
    activity_log_collection: str = "admin_activity_logs"

    # Flows: deleting a flow with more uses than this requires force=true
    flow_high_usage_threshold: int = 100

    # Admin activity log batching
    activity_log_enabled: bool = True
    activity_log_flush_interval_seconds: float = 30.0
    activity_log_max_queue_size: int = 1000
    activity_log_max_batch_size: int = 500  # Firestore commit limit
    activity_log_retry_attempts: int = 2
    activity_log_retry_delay_seconds: float = 1.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_limits(self) -> "Settings":
        """Validate numeric limits that would make batching or deletion rules meaningless."""
        if self.activity_log_max_batch_size < 1 or self.activity_log_max_batch_size > 500:
            raise ValueError(
                "ACTIVITY_LOG_MAX_BATCH_SIZE must be between 1 and 500 "
                "(Firestore commit limit)."
            )
        if self.activity_log_max_queue_size < 2:
            raise ValueError("ACTIVITY_LOG_MAX_QUEUE_SIZE must be at least 2.")
        if self.activity_log_retry_attempts < 1:
            raise ValueError("ACTIVITY_LOG_RETRY_ATTEMPTS must be at least 1.")
        if self.flow_high_usage_threshold < 0:
            raise ValueError("FLOW_HIGH_USAGE_THRESHOLD must not be negative.")
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
