# Tests for oauth/state.py, oauth/urls.py and oauth/models.py
# Created: 2026-10-19

import re

import pytest

from webex_oauth.errors import ConfigurationError
from webex_oauth.oauth.models import ClientRegistration, TokenBundle
from webex_oauth.oauth.state import STATE_BYTES, generate_state, states_match
from webex_oauth.oauth.urls import build_authorization_url, build_logout_url, root_url

AUTHORIZE = "https://webexapis.com/v1/authorize"
LOGOUT = "https://idbroker.webex.com/idb/oauth2/v1/logout"


@pytest.fixture
def registration():
    return ClientRegistration(
        client_id="C123",
        client_secret="secret",
        redirect_uri="http://localhost:8080/oauth",
        scopes=("spark:people_read", "spark:rooms_read"),
    )


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


class TestState:
    def test_length_and_alphabet(self):
        state = generate_state()
        assert len(state) == STATE_BYTES * 2
        assert re.fullmatch(r"[0-9a-f]+", state)

    def test_unique(self):
        assert len({generate_state() for _ in range(100)}) == 100

    def test_match_exact(self):
        assert states_match("abc", "abc")

    def test_mismatch(self):
        assert not states_match("abc", "abd")
        assert not states_match("abc", "ABC")

    def test_missing_never_matches(self):
        assert not states_match(None, "abc")
        assert not states_match("abc", None)
        assert not states_match("", "")


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------


class TestAuthorizationUrl:
    def test_exact_url(self, registration):
        url = build_authorization_url(AUTHORIZE, registration, state="abc")
        assert url == (
            "https://webexapis.com/v1/authorize?client_id=C123&response_type=code"
            "&redirect_uri=http%3A%2F%2Flocalhost%3A8080%2Foauth"
            "&scope=spark%3Apeople_read%20spark%3Arooms_read&state=abc"
        )

    def test_deterministic(self, registration):
        first = build_authorization_url(AUTHORIZE, registration, state="s1")
        second = build_authorization_url(AUTHORIZE, registration, state="s1")
        assert first == second

    def test_scope_override_keeps_order(self, registration):
        url = build_authorization_url(AUTHORIZE, registration, "s", scopes=["b", "a"])
        assert "scope=b%20a&" in url


class TestLogoutUrl:
    def test_root_url(self):
        assert root_url("http://localhost:8080/oauth") == "http://localhost:8080/"
        assert root_url("https://example.com/app/callback") == "https://example.com/app/"

    def test_with_token(self):
        url = build_logout_url(LOGOUT, "http://localhost:8080/oauth", "T1")
        assert url == f"{LOGOUT}?goto=http%3A%2F%2Flocalhost%3A8080%2F&token=T1"

    def test_without_token(self):
        url = build_logout_url(LOGOUT, "http://localhost:8080/oauth", None)
        assert url == f"{LOGOUT}?goto=http%3A%2F%2Flocalhost%3A8080%2F"


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class TestClientRegistration:
    @pytest.mark.parametrize("missing", ["client_id", "client_secret", "redirect_uri"])
    def test_empty_field_is_fatal(self, missing):
        values = {"client_id": "id", "client_secret": "secret", "redirect_uri": "http://x/oauth"}
        values[missing] = ""
        with pytest.raises(ConfigurationError, match=missing.upper()):
            ClientRegistration(**values)

    def test_secret_not_in_repr(self, registration):
        assert "client_secret" not in repr(registration)


class TestTokenBundle:
    def test_from_payload(self):
        tokens = TokenBundle.from_payload(
            {
                "access_token": "T1",
                "expires_in": 1209600,
                "refresh_token": "R1",
                "refresh_token_expires_in": 7776000,
            }
        )
        assert tokens is not None
        assert tokens.access_token == "T1"
        assert tokens.refresh_token == "R1"
        assert tokens.expires_at == pytest.approx(tokens.issued_at + 1209600)

    def test_not_an_object(self):
        assert TokenBundle.from_payload(["T1"]) is None
        assert TokenBundle.from_payload(None) is None

    def test_non_integer_lifetime(self):
        payload = {
            "access_token": "T1",
            "expires_in": "two weeks",
            "refresh_token": "R1",
            "refresh_token_expires_in": 7776000,
        }
        assert TokenBundle.from_payload(payload) is None

    @pytest.mark.parametrize("lifetime", [0, -1, True, "1209600", 12.5])
    def test_lifetime_must_be_positive_int(self, lifetime):
        payload = {
            "access_token": "T1",
            "expires_in": lifetime,
            "refresh_token": "R1",
            "refresh_token_expires_in": 7776000,
        }
        assert TokenBundle.from_payload(payload) is None

    def test_empty_token(self):
        payload = {
            "access_token": "",
            "expires_in": 1209600,
            "refresh_token": "R1",
            "refresh_token_expires_in": 7776000,
        }
        assert TokenBundle.from_payload(payload) is None
