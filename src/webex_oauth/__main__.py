"""Webex OAuth Integration entry point.

Fails fast when the client registration is incomplete: the server never
starts listening without CLIENT_ID, CLIENT_SECRET and REDIRECT_URI.
"""

import argparse
import logging
import sys

from webex_oauth import __version__
from webex_oauth.config import Settings
from webex_oauth.errors import ConfigurationError
from webex_oauth.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Webex integration running the OAuth authorization code flow",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  webex-oauth                        Start on the configured host/port (default 127.0.0.1:8080)
  webex-oauth --port 9000            Override PORT
  webex-oauth --env-file prod.env    Read settings from another .env file
""",
    )
    parser.add_argument("--host", type=str, default=None, help="Host to bind (default: HOST)")
    parser.add_argument("--port", "-p", type=int, default=None, help="Port (default: PORT)")
    parser.add_argument(
        "--env-file", type=str, default=".env", help="Settings file (default: .env)"
    )
    parser.add_argument("--log-level", type=str, default=None, help="DEBUG, INFO, WARNING...")
    parser.add_argument(
        "--version", "-v", action="version", version=f"%(prog)s {__version__}"
    )
    args = parser.parse_args()

    settings = Settings(_env_file=args.env_file)
    setup_logging(level=args.log_level or settings.log_level)

    try:
        from webex_oauth.web import create_app

        app = create_app(settings)
    except ConfigurationError as e:
        logger.error("%s See README.", e)
        sys.exit(1)

    logger.debug(
        "OAuth integration settings:\n   - CLIENT_ID    : %s\n   - REDIRECT_URI : %s\n"
        "   - SCOPES       : %s",
        settings.client_id,
        settings.redirect_uri,
        settings.scopes,
    )

    import uvicorn

    host = args.host or settings.host
    port = args.port or settings.port
    logger.info("Webex OAuth Integration started on http://%s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
