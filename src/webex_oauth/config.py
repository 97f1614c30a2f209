"""
Runtime settings loaded from environment variables and an optional ``.env`` file.

Variables carry no prefix: ``CLIENT_ID``, ``CLIENT_SECRET``, ``REDIRECT_URI``,
``SCOPES``, ``PORT``, ``STATE`` and so on.
"""

from __future__ import annotations

import secrets
import urllib.parse
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from webex_oauth.oauth.models import ClientRegistration
from webex_oauth.oauth.urls import root_url


class Settings(BaseSettings):
    """Integration configuration."""

    # Client registration (required)
    client_id: str = ""
    client_secret: str = Field(default="", repr=False)
    redirect_uri: str = ""
    scopes: str = "spark:people_read"

    # Fixed state instead of a random value per login attempt
    state: Optional[str] = None

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"

    # Provider endpoints
    authorization_endpoint: str = "https://webexapis.com/v1/authorize"
    token_endpoint: str = "https://webexapis.com/v1/access_token"
    api_base_url: str = "https://webexapis.com/v1"
    logout_endpoint: str = "https://idbroker.webex.com/idb/oauth2/v1/logout"
    http_timeout: float = 15.0

    # Sessions
    session_secret: str = Field(default_factory=lambda: secrets.token_hex(64), repr=False)
    session_cookie: str = "webex_session"
    session_ttl_hours: int = 24

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("state", mode="before")
    @classmethod
    def _empty_string_to_none(cls, value: Optional[str]):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def scope_list(self) -> list[str]:
        return self.scopes.split()

    @property
    def callback_path(self) -> str:
        return urllib.parse.urlsplit(self.redirect_uri).path or "/"

    @property
    def root_url(self) -> str:
        return root_url(self.redirect_uri)

    def registration(self) -> ClientRegistration:
        """Client registration built from these settings.

        Raises:
            ConfigurationError: client id, secret or redirect URI is empty.
        """
        return ClientRegistration(
            client_id=self.client_id,
            client_secret=self.client_secret,
            redirect_uri=self.redirect_uri,
            scopes=tuple(self.scope_list),
        )


@lru_cache
def get_settings() -> Settings:
    """Return the cached Settings instance."""
    return Settings()
