"""Webex OAuth integration.

Runs the OAuth authorization code flow against Webex and calls the REST API
on the authenticated user's behalf.
"""

__version__ = "0.1.0"
