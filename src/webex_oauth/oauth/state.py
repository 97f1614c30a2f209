"""Anti-forgery ``state`` values for the authorization redirect."""

import hmac
import secrets

__all__ = ["STATE_BYTES", "generate_state", "states_match"]

STATE_BYTES = 32


def generate_state() -> str:
    """Return a fresh hex-encoded random state (``STATE_BYTES`` of entropy)."""
    return secrets.token_hex(STATE_BYTES)


def states_match(received: str | None, expected: str | None) -> bool:
    """Exact comparison of the returned state against the one we issued."""
    if not received or not expected:
        return False
    return hmac.compare_digest(received.encode(), expected.encode())
