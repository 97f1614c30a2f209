# Session Store — server-side session records keyed by a signed cookie.
# Created: 2026-10-19
#
# In-memory only; records vanish on restart. The token is bound through a
# compare-and-set on the pending state so that a slow callback cannot overwrite
# a session that has since logged out or started a newer login.

from __future__ import annotations

import asyncio
import logging
import secrets
import time
from dataclasses import dataclass, field

from webex_oauth.oauth.models import TokenBundle
from webex_oauth.oauth.state import generate_state, states_match
from webex_oauth.security.session_tokens import unsign_session_id

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 24 * 3600


@dataclass
class SessionRecord:
    """Server-side state for one user agent."""

    session_id: str
    token: str | None = field(default=None, repr=False)
    refresh_token: str | None = field(default=None, repr=False)
    expires_at: float | None = None
    pending_state: str | None = field(default=None, repr=False)
    created_at: float = field(default_factory=time.time)
    last_seen: float = field(default_factory=time.time)

    @property
    def authenticated(self) -> bool:
        """True while an access token is bound and has not expired."""
        if self.token is None:
            return False
        return self.expires_at is None or time.time() < self.expires_at


class SessionStore:
    """Process-wide ``{session_id -> SessionRecord}`` map."""

    def __init__(self, secret: str, ttl_seconds: int = DEFAULT_TTL_SECONDS):
        self.secret = secret
        self.ttl_seconds = ttl_seconds
        self._sessions: dict[str, SessionRecord] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def open(self, cookie: str | None) -> tuple[SessionRecord, bool]:
        """Resolve the session for a request cookie, creating one if needed.

        Returns (record, created).
        """
        session_id = unsign_session_id(cookie, self.secret)
        record = self.get(session_id) if session_id else None
        if record is not None:
            record.last_seen = time.time()
            return record, False

        record = SessionRecord(session_id=secrets.token_urlsafe(32))
        self._sessions[record.session_id] = record
        return record, True

    def get(self, session_id: str) -> SessionRecord | None:
        record = self._sessions.get(session_id)
        if record is not None and self._expired(record, time.time()):
            del self._sessions[session_id]
            return None
        return record

    def get_token(self, session_id: str) -> str | None:
        """Usable access token for the session; None once it has expired."""
        record = self.get(session_id)
        return record.token if record and record.authenticated else None

    def expected_state(self, session_id: str) -> str | None:
        record = self.get(session_id)
        return record.pending_state if record else None

    async def begin_flow(self, session_id: str, fixed_state: str | None = None) -> str:
        """Issue the state for a new login attempt from this session.

        Reuses an outstanding state so that reloading the home page does not
        invalidate a consent screen that is already open.
        """
        async with self._lock:
            record = self._sessions.get(session_id)
            if record is None:
                raise KeyError(session_id)
            if fixed_state:
                record.pending_state = fixed_state
            elif record.pending_state is None:
                record.pending_state = generate_state()
            return record.pending_state

    async def bind_token(self, session_id: str, tokens: TokenBundle, state: str) -> bool:
        """Bind an access token if *state* is still the session's pending state.

        Returns False, leaving the session untouched, when the session is gone
        or a different flow has started since the exchange began.
        """
        async with self._lock:
            record = self.get(session_id)
            if record is None or not states_match(state, record.pending_state):
                logger.warning("Token not bound: session ended or flow superseded")
                return False
            self._apply(record, tokens)
            record.pending_state = None
            return True

    async def rebind_token(self, session_id: str, tokens: TokenBundle, previous: str) -> bool:
        """Replace the access token after a refresh, if it is still *previous*."""
        async with self._lock:
            record = self.get(session_id)
            if record is None or record.token != previous:
                return False
            self._apply(record, tokens)
            return True

    async def destroy(self, session_id: str) -> SessionRecord | None:
        async with self._lock:
            return self._sessions.pop(session_id, None)

    def cleanup_expired(self) -> int:
        """Drop idle sessions. Returns how many were removed."""
        now = time.time()
        expired = [k for k, v in self._sessions.items() if self._expired(v, now)]
        for k in expired:
            del self._sessions[k]
        if expired:
            logger.debug("Removed %d expired sessions", len(expired))
        return len(expired)

    def _expired(self, record: SessionRecord, now: float) -> bool:
        return now - record.last_seen > self.ttl_seconds

    @staticmethod
    def _apply(record: SessionRecord, tokens: TokenBundle) -> None:
        record.token = tokens.access_token
        record.refresh_token = tokens.refresh_token
        record.expires_at = tokens.expires_at
