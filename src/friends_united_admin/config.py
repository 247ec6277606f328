"""Application configuration."""

import os
from urllib.parse import urlparse

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_AFTER_LOGIN_PATH = "/dashboard"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    auth_api_base_url: str = "http://localhost:3000/api"
    sanity_project_id: str = "e6ou6t4t"
    sanity_dataset: str = "production"
    sanity_api_version: str = "2025-01-01"
    sanity_api_token: str | None = None
    request_timeout_seconds: float = 30.0
    session_cookie_secure: bool = False
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def sanity_api_url(self) -> str:
        """Base URL of the Sanity HTTP API (never the CDN, reads must be fresh)."""
        return (
            f"https://{self.sanity_project_id}.api.sanity.io/v{self.sanity_api_version}"
        )

    @property
    def sanity_image_cdn_url(self) -> str:
        """Base URL for rendered image assets."""
        return (
            f"https://cdn.sanity.io/images/{self.sanity_project_id}/"
            f"{self.sanity_dataset}"
        )


def sanitize_next_path(raw: str | None) -> str:
    """Return a same-site path to continue to after login."""
    if not raw or "\\" in raw:
        return DEFAULT_AFTER_LOGIN_PATH
    parsed = urlparse(raw)
    if parsed.scheme or parsed.netloc:
        return DEFAULT_AFTER_LOGIN_PATH
    if not parsed.path.startswith("/") or parsed.path.startswith("//"):
        return DEFAULT_AFTER_LOGIN_PATH
    if parsed.path in {"/auth", "/logout"}:
        return DEFAULT_AFTER_LOGIN_PATH
    if parsed.query:
        return f"{parsed.path}?{parsed.query}"
    return parsed.path
