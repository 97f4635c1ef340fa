"""Environment settings - loads API address and credentials.

Values come from NETHEAL_* environment variables or a ``.env`` file in the
working directory. The bearer token can also live in the persistent
credentials file (``~/.netheal/credentials``, KEY=VALUE lines).
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "http://localhost:5000/api"
DEFAULT_CREDENTIALS_FILE = Path.home() / ".netheal" / "credentials"


class Settings(BaseSettings):
    """Client configuration for the netheal console."""

    model_config = SettingsConfigDict(
        env_prefix="NETHEAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================
    # API Server
    # ============================================
    api_url: str = DEFAULT_API_URL
    request_timeout: float = Field(default=30.0, gt=0)

    # ============================================
    # Credentials
    # ============================================
    auth_token: str = ""
    credentials_file: Path = DEFAULT_CREDENTIALS_FILE

    # ============================================
    # Notifications & Logging
    # ============================================
    notification_ttl: float = Field(default=4.0, ge=0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def _load_credentials_file(path: Path) -> dict[str, str]:
    """Load credentials from a KEY=VALUE file."""
    credentials: dict[str, str] = {}
    if not path.exists():
        return credentials

    with open(path, encoding="utf-8") as f:
        for raw in f:
            line = raw.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, _, value = line.partition("=")
            credentials[key.strip()] = value.strip()

    return credentials


def load_auth_token(settings: Settings, explicit: str | None = None) -> str | None:
    """Resolve the bearer token.

    Token lookup priority:
      1) explicit argument (e.g. ``--token``)
      2) NETHEAL_AUTH_TOKEN env var / .env
      3) AUTH_TOKEN from the credentials file
    """
    if explicit:
        return explicit
    if settings.auth_token:
        return settings.auth_token
    return _load_credentials_file(settings.credentials_file).get("AUTH_TOKEN") or None


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings instance."""
    return Settings()
