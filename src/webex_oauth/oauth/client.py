# Token Exchange Client — authorization code and refresh token grants.
# Created: 2026-10-19
#
# Each call returns ``(TokenBundle, None)`` on success or ``(None, FlowError)``.
# No retries: a failed exchange is reported to the caller as-is.

from __future__ import annotations

import logging

import httpx

from webex_oauth.errors import ErrorKind, FlowError
from webex_oauth.oauth.models import ClientRegistration, TokenBundle
from webex_oauth.oauth.state import states_match

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0

ExchangeResult = tuple[TokenBundle | None, FlowError | None]


def check_callback(
    code: str | None,
    state_received: str | None,
    state_expected: str | None,
    error: str | None = None,
) -> FlowError | None:
    """Validate callback query parameters before any code leaves the process.

    Checks run in order: provider ``error``, missing ``code``/``state``,
    then the exact state comparison.
    """
    if error:
        logger.info("Authorization not granted, provider returned error=%s", error)
        return FlowError.denied(error)

    if not code or not state_received:
        logger.info("Expected code & state query parameters are not present")
        return FlowError(ErrorKind.MALFORMED_CALLBACK)

    if not states_match(state_received, state_expected):
        logger.warning("State in callback does not match the issued state, aborting exchange")
        return FlowError(ErrorKind.STATE_MISMATCH)

    return None


class TokenExchangeClient:
    """Back-channel client for the provider's token endpoint."""

    def __init__(
        self,
        registration: ClientRegistration,
        token_endpoint: str,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.registration = registration
        self.token_endpoint = token_endpoint
        self.timeout = timeout

    async def exchange_code(
        self,
        code: str | None,
        state_received: str | None,
        state_expected: str | None,
        error: str | None = None,
    ) -> ExchangeResult:
        """Trade an authorization code for a token bundle.

        Args:
            code: ``code`` query parameter from the callback.
            state_received: ``state`` query parameter from the callback.
            state_expected: State issued when the flow started.
            error: ``error`` query parameter, if the provider sent one.
        """
        failure = check_callback(code, state_received, state_expected, error)
        if failure is not None:
            return None, failure

        return await self._request_tokens(
            {
                "grant_type": "authorization_code",
                "client_id": self.registration.client_id,
                "client_secret": self.registration.client_secret,
                "code": code,
                "redirect_uri": self.registration.redirect_uri,
            }
        )

    async def refresh_token(self, refresh_token: str | None) -> ExchangeResult:
        """Obtain a new token bundle from a refresh token."""
        if not refresh_token:
            return None, FlowError(ErrorKind.MALFORMED_CALLBACK, message="no refresh token")

        result = await self._request_tokens(
            {
                "grant_type": "refresh_token",
                "client_id": self.registration.client_id,
                "client_secret": self.registration.client_secret,
                "refresh_token": refresh_token,
            }
        )
        if result[1] is None:
            logger.info("Refreshed access token")
        else:
            logger.warning("Token refresh failed: %s", result[1])
        return result

    async def _request_tokens(self, form: dict[str, str]) -> ExchangeResult:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(
                    self.token_endpoint,
                    data=form,
                    headers={"content-type": "application/x-www-form-urlencoded"},
                )
        except httpx.RequestError as e:
            logger.warning("Could not reach token endpoint: %s", e)
            return None, FlowError(ErrorKind.NETWORK_ERROR, message=str(e))

        if resp.status_code != 200:
            logger.info("Access token not issued, status code: %s", resp.status_code)
            return None, _classify_status(resp)

        try:
            data = resp.json()
        except ValueError:
            logger.warning("Token response is not valid JSON")
            return None, FlowError(ErrorKind.MALFORMED_TOKEN_RESPONSE)

        tokens = TokenBundle.from_payload(data)
        if tokens is None:
            logger.warning("Could not parse access & refresh tokens")
            return None, FlowError(ErrorKind.MALFORMED_TOKEN_RESPONSE)

        logger.debug(
            "Fetched tokens: access=%s... expires_in=%d refresh_expires_in=%d",
            tokens.access_token[:8],
            tokens.expires_in,
            tokens.refresh_token_expires_in,
        )
        return tokens, None


def _classify_status(resp: httpx.Response) -> FlowError:
    if resp.status_code == 400:
        return FlowError(
            ErrorKind.BAD_REQUEST,
            message=_provider_message(resp),
            status_code=400,
        )
    if resp.status_code == 401:
        return FlowError(ErrorKind.AUTH_FAILURE, status_code=401)
    return FlowError(ErrorKind.UNEXPECTED_STATUS, status_code=resp.status_code)


def _provider_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return ""
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return ""
