from webex_oauth.security.session_tokens import sign_session_id, unsign_session_id

__all__ = ["sign_session_id", "unsign_session_id"]
