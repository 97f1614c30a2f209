"""User-facing text for each failure of the flow."""

from __future__ import annotations

from webex_oauth.errors import DenialKind, ErrorKind, FlowError

TITLE = "OAuth Integration could not complete"

_DENIALS = {
    DenialKind.ACCESS_DENIED: "User declined data access request, bye.",
    DenialKind.INVALID_SCOPE: (
        "This application requested an invalid scope. Make sure your Integration "
        "contains all scopes being requested by the app, bye."
    ),
    DenialKind.SERVER_ERROR: "Webex sent a server error, bye.",
    DenialKind.UNKNOWN: "Error case not implemented, bye.",
}

_TOKEN_ERRORS = {
    ErrorKind.MALFORMED_CALLBACK: "Unexpected query parameters, ignoring...",
    ErrorKind.STATE_MISMATCH: (
        "State in response does not match the one in the request, aborting..."
    ),
    ErrorKind.NETWORK_ERROR: "Sorry, could not retrieve your access token. Try again...",
    ErrorKind.AUTH_FAILURE: (
        "OAuth authentication error. Ask the service contact to check the secret."
    ),
    ErrorKind.MALFORMED_TOKEN_RESPONSE: "Could not parse API access token. Try again...",
}


def describe(error: FlowError, subject: str | None = None) -> str:
    """Message shown for *error*.

    ``subject`` names the resource for failures of a resource call
    (e.g. "Webex account details"); token exchange failures leave it unset.
    """
    if subject is not None:
        return f"Sorry, could not retrieve your {subject}."

    if error.kind is ErrorKind.AUTHORIZATION_DENIED:
        return _DENIALS[error.denial or DenialKind.UNKNOWN]
    if error.kind is ErrorKind.BAD_REQUEST:
        return f"Bad request. {error.message}".strip()
    if error.kind is ErrorKind.UNEXPECTED_STATUS:
        return (
            f"Sorry, could not retrieve your access token "
            f"(Webex answered with status {error.status_code}). Try again..."
        )
    return _TOKEN_ERRORS.get(error.kind, "Sorry, something went wrong. Try again...")
