# Tests for config.py
# Created: 2026-10-19

import pytest

from webex_oauth.config import Settings
from webex_oauth.errors import ConfigurationError


@pytest.fixture
def env(monkeypatch):
    for name in ("CLIENT_ID", "CLIENT_SECRET", "REDIRECT_URI", "SCOPES", "PORT", "STATE"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    def test_reads_environment(self, env):
        env.setenv("CLIENT_ID", "cid")
        env.setenv("CLIENT_SECRET", "csecret")
        env.setenv("REDIRECT_URI", "http://localhost:9000/oauth")
        env.setenv("SCOPES", "spark:people_read spark:rooms_read")
        env.setenv("PORT", "9000")

        settings = Settings(_env_file=None)
        assert settings.client_id == "cid"
        assert settings.port == 9000
        assert settings.scope_list == ["spark:people_read", "spark:rooms_read"]
        assert settings.callback_path == "/oauth"
        assert settings.root_url == "http://localhost:9000/"

    def test_defaults(self, env):
        settings = Settings(_env_file=None)
        assert settings.scopes == "spark:people_read"
        assert settings.port == 8080
        assert settings.state is None

    def test_reads_env_file(self, env, tmp_path):
        path = tmp_path / ".env"
        path.write_text("CLIENT_ID=from-file\nSTATE=fixed\n")
        settings = Settings(_env_file=path)
        assert settings.client_id == "from-file"
        assert settings.state == "fixed"

    def test_blank_state_is_none(self, env):
        env.setenv("STATE", "  ")
        assert Settings(_env_file=None).state is None

    def test_session_secret_is_random_by_default(self, env):
        assert Settings(_env_file=None).session_secret != Settings(_env_file=None).session_secret

    def test_secret_not_in_repr(self, env):
        settings = Settings(_env_file=None, client_secret="hunter2")
        assert "hunter2" not in repr(settings)


class TestRegistration:
    def test_complete(self, settings):
        registration = settings.registration()
        assert registration.client_id == "test-client-id"
        assert registration.scopes == ("spark:people_read", "spark:rooms_read")

    def test_missing_values_are_fatal(self, env):
        with pytest.raises(ConfigurationError, match="CLIENT_ID, CLIENT_SECRET, REDIRECT_URI"):
            Settings(_env_file=None).registration()
