"""HMAC-signed session cookies.

Cookie format: ``{session_id}.{hex_hmac}``

The session secret is the HMAC key, so rotating it (or restarting with the
default random secret) invalidates every outstanding cookie.
"""

import hashlib
import hmac

__all__ = ["sign_session_id", "unsign_session_id"]


def sign_session_id(session_id: str, secret: str) -> str:
    """Return the cookie value carrying *session_id*."""
    return f"{session_id}.{_sign(secret, session_id)}"


def unsign_session_id(cookie: str | None, secret: str) -> str | None:
    """Return the session id from a cookie value, or None if the signature is bad."""
    if not cookie:
        return None

    session_id, sep, sig = cookie.rpartition(".")
    if not sep or not session_id:
        return None

    # Bytes: compare_digest rejects non-ASCII str with TypeError.
    expected = _sign(secret, session_id)
    if not hmac.compare_digest(sig.encode(), expected.encode()):
        return None
    return session_id


def _sign(key: str, message: str) -> str:
    return hmac.new(key.encode(), message.encode(), hashlib.sha256).hexdigest()
