from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Webhook that delivers exported reports.  Empty means log-only delivery.
    NOTIFY_WEBHOOK_URL: str = ""
    NOTIFY_TIMEOUT_SECONDS: float = 10.0
    REPORT_TO: str = "swanand@superlinearinsights.com"
    REPORT_CC: str = "vamsi@superlinearinsights.com"
    REPORT_FROM: str = "noreply@dora-check.com"
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


settings = Settings()
