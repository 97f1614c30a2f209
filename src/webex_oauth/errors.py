# Error taxonomy for the OAuth flow.
# Created: 2026-10-19
#
# Only ConfigurationError is raised. Every other failure is a FlowError value
# returned next to a None result, e.g. ``tokens, error = await client.exchange_code(...)``.

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = ["ConfigurationError", "DenialKind", "ErrorKind", "FlowError"]


class ConfigurationError(Exception):
    """Client registration is incomplete. Fatal at startup."""


class ErrorKind(str, Enum):
    """Recoverable failure kinds surfaced to the user."""

    AUTHORIZATION_DENIED = "authorization_denied"
    MALFORMED_CALLBACK = "malformed_callback"
    STATE_MISMATCH = "state_mismatch"
    NETWORK_ERROR = "network_error"
    BAD_REQUEST = "bad_request"
    AUTH_FAILURE = "auth_failure"
    UNEXPECTED_STATUS = "unexpected_status"
    MALFORMED_TOKEN_RESPONSE = "malformed_token_response"
    MALFORMED_RESPONSE = "malformed_response"


class DenialKind(str, Enum):
    """Value of the ``error`` query parameter sent back by the provider."""

    ACCESS_DENIED = "access_denied"
    INVALID_SCOPE = "invalid_scope"
    SERVER_ERROR = "server_error"
    UNKNOWN = "unknown"

    @classmethod
    def classify(cls, value: str) -> DenialKind:
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class FlowError:
    """A failed step of the flow."""

    kind: ErrorKind
    message: str = ""
    status_code: int | None = None
    denial: DenialKind | None = None

    @classmethod
    def denied(cls, value: str) -> FlowError:
        return cls(ErrorKind.AUTHORIZATION_DENIED, message=value, denial=DenialKind.classify(value))

    def __str__(self) -> str:
        parts = [self.kind.value]
        if self.denial is not None:
            parts.append(self.denial.value)
        if self.status_code is not None:
            parts.append(str(self.status_code))
        if self.message:
            parts.append(self.message)
        return ": ".join(parts)
