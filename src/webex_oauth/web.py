"""Webex OAuth Integration - Web Server

FastAPI app serving the home page, the OAuth redirect URI, the room listing
and logout. Session cookies are resolved by ``session_middleware`` before any
route runs; routes only see ``request.state.session_id``.
"""

import logging
from pathlib import Path

from fastapi import FastAPI, Query, Request
from fastapi.responses import RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from webex_oauth import __version__
from webex_oauth.config import Settings, get_settings
from webex_oauth.flow import FlowOutcome, FlowStage, OAuthFlowController
from webex_oauth.messages import TITLE
from webex_oauth.security.session_tokens import sign_session_id

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def _render_error(request: Request, outcome: FlowOutcome) -> Response:
    return templates.TemplateResponse(
        request,
        "error.html",
        {
            "title": TITLE,
            "message": outcome.message,
            "kind": outcome.error.kind.value,
            "signed_in": outcome.stage is FlowStage.AUTHENTICATED,
        },
    )


def create_app(
    settings: Settings | None = None,
    controller: OAuthFlowController | None = None,
) -> FastAPI:
    """Build the web app.

    Raises:
        ConfigurationError: the client registration is incomplete.
    """
    settings = settings or get_settings()
    controller = controller or OAuthFlowController.from_settings(settings)
    sessions = controller.sessions
    callback_path = settings.callback_path
    secure_cookie = settings.redirect_uri.startswith("https://")

    app = FastAPI(
        title="Webex OAuth Integration",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.controller = controller
    app.state.sessions = sessions

    @app.middleware("http")
    async def session_middleware(request: Request, call_next):
        record, created = sessions.open(request.cookies.get(settings.session_cookie))
        request.state.session_id = record.session_id
        request.state.clear_session = False
        if created:
            sessions.cleanup_expired()

        response = await call_next(request)

        if request.state.clear_session:
            response.delete_cookie(settings.session_cookie)
        elif created:
            response.set_cookie(
                settings.session_cookie,
                sign_session_id(record.session_id, sessions.secret),
                max_age=sessions.ttl_seconds,
                httponly=True,
                samesite="lax",
                secure=secure_cookie,
            )
        return response

    async def oauth_callback(
        request: Request,
        code: str = Query(""),
        state: str = Query(""),
        error: str = Query(""),
    ):
        """OAuth redirect URI: exchange the authorization code for tokens."""
        outcome = await controller.callback(request.state.session_id, code, state, error)
        if not outcome.ok:
            return _render_error(request, outcome)
        return templates.TemplateResponse(
            request,
            "display_name.html",
            {"display_name": outcome.data["displayName"]},
        )

    @app.get("/")
    async def index(
        request: Request,
        code: str = Query(""),
        state: str = Query(""),
        error: str = Query(""),
    ):
        """Home page with the login link, or the signed-in user's name."""
        # Redirect URI registered at the site root: the provider lands here.
        if callback_path == "/" and (code or state or error):
            return await oauth_callback(request, code, state, error)

        outcome = await controller.home(request.state.session_id)
        if not outcome.ok:
            return _render_error(request, outcome)
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "link": outcome.authorization_url,
                "display_name": outcome.data["displayName"] if outcome.data else None,
            },
        )

    @app.get("/index.html")
    async def index_html():
        return RedirectResponse("/", status_code=302)

    if callback_path != "/":
        app.add_api_route(callback_path, oauth_callback, methods=["GET"])

    @app.get("/listrooms")
    @app.get("/rooms")
    async def list_rooms(request: Request):
        """Spaces the authenticated user belongs to."""
        outcome = await controller.rooms(request.state.session_id)
        if outcome.redirect_url:
            return RedirectResponse(outcome.redirect_url, status_code=302)
        if not outcome.ok:
            return _render_error(request, outcome)
        return templates.TemplateResponse(
            request,
            "list_rooms.html",
            {"rooms": outcome.data["items"]},
        )

    @app.get("/refresh")
    async def refresh(request: Request):
        """Renew the access token, then go back home."""
        outcome = await controller.refresh(request.state.session_id)
        if not outcome.ok:
            return _render_error(request, outcome)
        return RedirectResponse(outcome.redirect_url or "/", status_code=302)

    @app.get("/logout")
    async def logout(request: Request):
        """Log the user out at the provider and destroy the session."""
        outcome = await controller.logout(request.state.session_id)
        request.state.clear_session = True
        return RedirectResponse(outcome.redirect_url, status_code=302)

    return app
