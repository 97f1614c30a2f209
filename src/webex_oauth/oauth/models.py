# OAuth data models.
# Created: 2026-10-19

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

from webex_oauth.errors import ConfigurationError

TOKEN_FIELDS = ("access_token", "expires_in", "refresh_token", "refresh_token_expires_in")


@dataclass(frozen=True)
class ClientRegistration:
    """Integration credentials issued by the Webex developer portal."""

    client_id: str
    client_secret: str = field(repr=False)
    redirect_uri: str
    scopes: tuple[str, ...] = ("spark:people_read",)

    def __post_init__(self) -> None:
        missing = [
            name
            for name in ("client_id", "client_secret", "redirect_uri")
            if not getattr(self, name)
        ]
        if missing:
            raise ConfigurationError(
                f"{', '.join(n.upper() for n in missing)} not specified. "
                "Set them in the environment or the .env file."
            )


@dataclass
class TokenBundle:
    """Access + refresh token pair returned by the token endpoint."""

    access_token: str = field(repr=False)
    expires_in: int
    refresh_token: str = field(repr=False)
    refresh_token_expires_in: int
    issued_at: float = field(default_factory=time.time)

    @property
    def expires_at(self) -> float:
        return self.issued_at + self.expires_in

    @classmethod
    def from_payload(cls, data: Any) -> TokenBundle | None:
        """Build a bundle from a decoded token response.

        Returns None when the payload is not an object, a token is missing or
        empty, or a lifetime is not a positive integer.
        """
        if not isinstance(data, dict) or any(name not in data for name in TOKEN_FIELDS):
            return None
        for name in ("access_token", "refresh_token"):
            if not isinstance(data.get(name), str) or not data[name]:
                return None
        for name in ("expires_in", "refresh_token_expires_in"):
            value = data.get(name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                return None
        return cls(
            access_token=data["access_token"],
            expires_in=data["expires_in"],
            refresh_token=data["refresh_token"],
            refresh_token_expires_in=data["refresh_token_expires_in"],
        )
