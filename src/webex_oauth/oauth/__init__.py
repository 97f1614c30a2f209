from webex_oauth.oauth.client import TokenExchangeClient, check_callback
from webex_oauth.oauth.models import ClientRegistration, TokenBundle
from webex_oauth.oauth.resources import ResourceClient
from webex_oauth.oauth.state import generate_state, states_match
from webex_oauth.oauth.urls import build_authorization_url, build_logout_url, root_url

__all__ = [
    "ClientRegistration",
    "ResourceClient",
    "TokenBundle",
    "TokenExchangeClient",
    "build_authorization_url",
    "build_logout_url",
    "check_callback",
    "generate_state",
    "root_url",
    "states_match",
]
