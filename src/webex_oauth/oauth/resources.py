# Resource Client — bearer-authenticated calls to the Webex REST API.
# Created: 2026-10-19

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import httpx

from webex_oauth.errors import ErrorKind, FlowError

logger = logging.getLogger(__name__)

_WEBEX_BASE = "https://webexapis.com/v1"

ResourceResult = tuple[dict[str, Any] | None, FlowError | None]


class ResourceClient:
    """HTTP client for protected Webex REST resources.

    Every call presents the caller's access token as a bearer credential and
    checks that the JSON body carries the fields the page needs.
    """

    def __init__(self, base_url: str = _WEBEX_BASE, timeout: float = 15.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def get_json(
        self,
        endpoint: str,
        bearer_token: str,
        required_fields: Iterable[str] = (),
    ) -> ResourceResult:
        """GET ``endpoint`` (absolute, or relative to ``base_url``).

        Returns:
            ``(body, None)`` when the call succeeds and every required field is
            present, otherwise ``(None, FlowError)``.
        """
        url = endpoint if "://" in endpoint else f"{self.base_url}/{endpoint.lstrip('/')}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(url, headers={"authorization": f"Bearer {bearer_token}"})
        except httpx.RequestError as e:
            logger.warning("Could not reach %s: %s", url, e)
            return None, FlowError(ErrorKind.NETWORK_ERROR, message=str(e))

        if resp.status_code != 200:
            logger.info("%s returned: %s", url, resp.status_code)
            return None, FlowError(ErrorKind.UNEXPECTED_STATUS, status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError:
            data = None

        # null or "" counts as missing; an empty list (no rooms) does not
        missing = [
            f
            for f in required_fields
            if not isinstance(data, dict) or data.get(f) is None or data.get(f) == ""
        ]
        if data is None or missing:
            logger.info("Bad JSON payload from %s, missing %s", url, missing or "body")
            return None, FlowError(ErrorKind.MALFORMED_RESPONSE, message=", ".join(missing))

        return data, None

    async def get_profile(self, bearer_token: str) -> ResourceResult:
        """Details of the authenticated user (``people/me``)."""
        return await self.get_json("people/me", bearer_token, {"displayName"})

    async def list_rooms(self, bearer_token: str) -> ResourceResult:
        """Spaces the authenticated user belongs to."""
        return await self.get_json("rooms", bearer_token, {"items"})
