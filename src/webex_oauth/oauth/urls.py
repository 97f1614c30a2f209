# Authorization and logout URL construction.
# Created: 2026-10-19

from __future__ import annotations

import urllib.parse
from collections.abc import Iterable

from webex_oauth.oauth.models import ClientRegistration


def _encode(params: dict[str, str]) -> str:
    # quote (not quote_plus) so the space between scopes becomes %20
    return urllib.parse.urlencode(params, quote_via=urllib.parse.quote, safe="")


def build_authorization_url(
    authorization_endpoint: str,
    registration: ClientRegistration,
    state: str,
    scopes: Iterable[str] | None = None,
) -> str:
    """Compose the URL the user agent is sent to for consent.

    Args:
        authorization_endpoint: Provider authorize URL.
        registration: Client credentials (only id and redirect URI are sent).
        state: Anti-forgery value expected back on the callback.
        scopes: Overrides ``registration.scopes`` when given. Order is kept.

    Returns:
        The authorization URL. Identical inputs give identical output.
    """
    params = {
        "client_id": registration.client_id,
        "response_type": "code",
        "redirect_uri": registration.redirect_uri,
        "scope": " ".join(scopes if scopes is not None else registration.scopes),
        "state": state,
    }
    return f"{authorization_endpoint}?{_encode(params)}"


def root_url(redirect_uri: str) -> str:
    """Strip the callback path segment off the redirect URI.

    ``http://localhost:8080/oauth`` -> ``http://localhost:8080/``
    """
    parts = urllib.parse.urlsplit(redirect_uri)
    path = parts.path.rsplit("/", 1)[0] + "/"
    return urllib.parse.urlunsplit((parts.scheme, parts.netloc, path, "", ""))


def build_logout_url(logout_endpoint: str, redirect_uri: str, token: str | None) -> str:
    params = {"goto": root_url(redirect_uri)}
    if token:
        params["token"] = token
    return f"{logout_endpoint}?{_encode(params)}"
