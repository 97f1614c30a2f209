# OAuth Flow Controller — drives one user agent from anonymous to authenticated.
# Created: 2026-10-19
#
# Stages: ANONYMOUS -> AWAITING_CALLBACK -> AUTHENTICATED, with FAILED reachable
# from any point. Every failure comes back as a FlowOutcome carrying the error
# and the message to show; nothing here raises to the web layer.

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from webex_oauth.config import Settings
from webex_oauth.errors import ErrorKind, FlowError
from webex_oauth.messages import describe
from webex_oauth.oauth.client import TokenExchangeClient
from webex_oauth.oauth.resources import ResourceClient
from webex_oauth.oauth.urls import build_authorization_url, build_logout_url
from webex_oauth.sessions import SessionStore

logger = logging.getLogger(__name__)

PROFILE_SUBJECT = "Webex account details"
ROOMS_SUBJECT = "Webex rooms"


class FlowStage(str, Enum):
    """Where a session stands in the login flow."""

    ANONYMOUS = "anonymous"
    AWAITING_CALLBACK = "awaiting_callback"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


@dataclass
class FlowOutcome:
    """Result of one controller step, ready to be rendered."""

    stage: FlowStage
    data: dict[str, Any] | None = None
    error: FlowError | None = None
    message: str = ""
    authorization_url: str | None = None
    redirect_url: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _failed(error: FlowError, subject: str | None = None, stage=FlowStage.FAILED) -> FlowOutcome:
    return FlowOutcome(stage=stage, error=error, message=describe(error, subject))


class OAuthFlowController:
    """Orchestrates the login, callback, API and logout steps for a session."""

    def __init__(
        self,
        settings: Settings,
        sessions: SessionStore,
        exchange: TokenExchangeClient,
        resources: ResourceClient,
    ):
        self.settings = settings
        self.registration = settings.registration()
        self.sessions = sessions
        self.exchange = exchange
        self.resources = resources

    @classmethod
    def from_settings(cls, settings: Settings) -> OAuthFlowController:
        """Wire a controller with in-memory sessions and live HTTP clients.

        Raises:
            ConfigurationError: the client registration is incomplete.
        """
        registration = settings.registration()
        return cls(
            settings=settings,
            sessions=SessionStore(
                secret=settings.session_secret,
                ttl_seconds=settings.session_ttl_hours * 3600,
            ),
            exchange=TokenExchangeClient(
                registration,
                token_endpoint=settings.token_endpoint,
                timeout=settings.http_timeout,
            ),
            resources=ResourceClient(
                base_url=settings.api_base_url,
                timeout=settings.http_timeout,
            ),
        )

    async def home(self, session_id: str) -> FlowOutcome:
        """Home page: profile for a signed-in session, else the login link."""
        token = self.sessions.get_token(session_id)
        if token:
            profile, error = await self.resources.get_profile(token)
            if error is not None:
                return _failed(error, PROFILE_SUBJECT, stage=FlowStage.AUTHENTICATED)
            return FlowOutcome(stage=FlowStage.AUTHENTICATED, data=profile)

        state = await self.sessions.begin_flow(session_id, self.settings.state)
        url = build_authorization_url(
            self.settings.authorization_endpoint,
            self.registration,
            state=state,
        )
        return FlowOutcome(stage=FlowStage.AWAITING_CALLBACK, authorization_url=url)

    async def callback(
        self,
        session_id: str,
        code: str | None,
        state: str | None,
        error: str | None = None,
    ) -> FlowOutcome:
        """Handle the provider redirect carrying ``code`` + ``state`` (or ``error``)."""
        logger.debug("OAuth redirect URL requested")

        expected = self.sessions.expected_state(session_id)
        if expected is None and self.settings.state:
            expected = await self.sessions.begin_flow(session_id, self.settings.state)

        tokens, failure = await self.exchange.exchange_code(code, state, expected, error)
        if failure is not None:
            return _failed(failure)

        if not await self.sessions.bind_token(session_id, tokens, expected):
            return _failed(FlowError(ErrorKind.STATE_MISMATCH, message="flow superseded"))
        logger.info("OAuth flow completed, access token bound to session")

        profile, failure = await self.resources.get_profile(tokens.access_token)
        if failure is not None:
            return _failed(failure, PROFILE_SUBJECT, stage=FlowStage.AUTHENTICATED)
        return FlowOutcome(stage=FlowStage.AUTHENTICATED, data=profile)

    async def rooms(self, session_id: str) -> FlowOutcome:
        """List the user's spaces. Unauthenticated sessions go back to ``/``."""
        token = self.sessions.get_token(session_id)
        if not token:
            logger.info("Access token not in session, redirecting to home page")
            return FlowOutcome(stage=FlowStage.ANONYMOUS, redirect_url="/")

        rooms, failure = await self.resources.list_rooms(token)
        if failure is not None:
            return _failed(failure, ROOMS_SUBJECT, stage=FlowStage.AUTHENTICATED)
        return FlowOutcome(stage=FlowStage.AUTHENTICATED, data=rooms)

    async def refresh(self, session_id: str) -> FlowOutcome:
        """Renew the session's access token with its refresh token."""
        record = self.sessions.get(session_id)
        if record is None or not record.token:
            return FlowOutcome(stage=FlowStage.ANONYMOUS, redirect_url="/")

        tokens, failure = await self.exchange.refresh_token(record.refresh_token)
        if failure is not None:
            return _failed(failure, stage=FlowStage.AUTHENTICATED)

        await self.sessions.rebind_token(session_id, tokens, previous=record.token)
        return FlowOutcome(stage=FlowStage.AUTHENTICATED, redirect_url="/")

    async def logout(self, session_id: str) -> FlowOutcome:
        """Destroy the session and send the user agent to the provider logout."""
        record = await self.sessions.destroy(session_id)
        token = record.token if record else None
        url = build_logout_url(self.settings.logout_endpoint, self.settings.redirect_uri, token)
        logger.info("Session destroyed, redirecting to provider logout")
        return FlowOutcome(stage=FlowStage.ANONYMOUS, redirect_url=url)
