"""
Runtime configuration helpers for the incident reporting API.

Loads DATABASE_URL, mail credentials and the CORS allow-list from the
environment, falling back to the .env file located in the project root.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Final

from dotenv import load_dotenv
from pydantic import EmailStr, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the project root
BASE_DIR = Path(__file__).resolve().parents[1]

# Absolute path to .env
ENV_PATH = BASE_DIR / ".env"

# Load .env defaults without overriding environment variables provided by the platform
load_dotenv(dotenv_path=ENV_PATH, override=False)

DEFAULT_ALLOWED_ORIGINS: Final[tuple[str, ...]] = (
    "https://frontend-282uhmhsf-janaki799s-projects.vercel.app",
    "http://localhost:3000",
    "http://localhost:3001",
    "http://localhost:5500",
    "http://127.0.0.1:5500",
)

_PLACEHOLDER_VALUES: Final[set[str]] = {
    "changeme",
    "change-me",
    "placeholder",
    "example",
    "sample",
    "your-key-here",
}


def is_placeholder(value: str | None) -> bool:
    """Return ``True`` for empty secrets or the sample values shipped in ``.env.example``."""

    if not value:
        return True
    normalized = value.strip().lower()
    return not normalized or normalized in _PLACEHOLDER_VALUES


def _split_csv(raw: str | None) -> list[str]:
    return [item.strip() for item in (raw or "").split(",") if item.strip()]


class Settings(BaseSettings):
    app_name: str = Field(default="Incident Reporting API", alias="APP_NAME")
    api_version: str = Field(default="1.0.0", alias="API_VERSION")
    environment: str = Field(default="development", alias="APP_ENV")
    port: int = Field(default=3001, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Store
    database_url: str = Field(default="sqlite+pysqlite:///./incident_reports.db", alias="DATABASE_URL")
    database_timeout_seconds: float = Field(default=10.0, alias="DATABASE_TIMEOUT_SECONDS")
    database_retry_delay_seconds: float = Field(default=5.0, alias="DATABASE_RETRY_DELAY_SECONDS")
    # 0 keeps retrying until the store answers.
    database_max_connect_attempts: int = Field(default=0, alias="DATABASE_MAX_CONNECT_ATTEMPTS")

    # Boundary
    allowed_origins_raw: str | None = Field(default=None, alias="ALLOWED_ORIGINS")

    # Reports
    report_date_required: bool = Field(default=False, alias="REPORT_DATE_REQUIRED")
    report_notify_recipients_raw: str | None = Field(default=None, alias="REPORT_NOTIFY_RECIPIENTS")

    # Mail transport
    email_host: str | None = Field(default=None, alias="EMAIL_HOST")
    email_port: int = Field(default=587, alias="EMAIL_PORT")
    email_username: str | None = Field(default=None, alias="EMAIL_USERNAME")
    email_password: str | None = Field(default=None, alias="EMAIL_PASSWORD")
    email_from_address: EmailStr | None = Field(default=None, alias="EMAIL_FROM_ADDRESS")
    email_use_tls: bool = Field(default=True, alias="EMAIL_USE_TLS")
    email_timeout_seconds: float = Field(default=20.0, alias="EMAIL_TIMEOUT_SECONDS")
    mailgun_api_key: str | None = Field(default=None, alias="MAILGUN_API_KEY")
    mailgun_domain: str | None = Field(default=None, alias="MAILGUN_DOMAIN")

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @property
    def allowed_origins(self) -> list[str]:
        origins = _split_csv(self.allowed_origins_raw)
        return origins or list(DEFAULT_ALLOWED_ORIGINS)

    @property
    def report_notify_recipients(self) -> list[str]:
        """Operators who receive new-report emails; never taken from the request."""

        recipients = _split_csv(self.report_notify_recipients_raw)
        if recipients:
            return recipients
        fallback = self.email_from_address or self.email_username
        return [str(fallback)] if fallback else []


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["DEFAULT_ALLOWED_ORIGINS", "Settings", "get_settings", "is_placeholder"]
