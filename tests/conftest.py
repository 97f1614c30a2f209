# Shared fixtures for the Webex OAuth integration tests.
# Created: 2026-10-19

from contextlib import contextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from webex_oauth.config import Settings
from webex_oauth.flow import OAuthFlowController

REDIRECT_URI = "http://localhost:8080/oauth"


def _make_response(status_code=200, json_data=None, json_error=False):
    """Stand-in for an httpx.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    if json_error:
        resp.json.side_effect = ValueError("Expecting value")
    else:
        resp.json.return_value = json_data
    return resp


@contextmanager
def _mock_http(post=None, get=None):
    """Patch httpx.AsyncClient; ``post``/``get`` are responses or exceptions."""
    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_client = AsyncMock()
        for name, value in (("post", post), ("get", get)):
            method = getattr(mock_client, name)
            if isinstance(value, BaseException):
                method.side_effect = value
            else:
                method.return_value = value
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=False)
        mock_client_cls.return_value = mock_client
        yield mock_client


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def mock_http():
    return _mock_http


@pytest.fixture
def token_payload():
    return {
        "access_token": "T1",
        "expires_in": 1209600,
        "refresh_token": "R1",
        "refresh_token_expires_in": 7776000,
    }


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        client_id="test-client-id",
        client_secret="test-client-secret",
        redirect_uri=REDIRECT_URI,
        scopes="spark:people_read spark:rooms_read",
        state=None,
        session_secret="test-session-secret",
    )


@pytest.fixture
def controller(settings):
    return OAuthFlowController.from_settings(settings)
