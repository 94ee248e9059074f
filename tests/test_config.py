"""Unit tests for environment-driven configuration."""
import logging
import os
from unittest.mock import MagicMock, patch

import pytest

from sheets_synapsis.auth.google_auth import GoogleAuthManager
from sheets_synapsis.auth.oauth_config import (
    OAuthConfig,
    get_oauth_config,
    reload_oauth_config,
)
from sheets_synapsis.auth.token_store import TokenStore
from sheets_synapsis.core.config import configure_logging, load_environment
from sheets_synapsis.utils.errors import ConfigurationError


class TestOAuthConfig:
    """Tests for OAuthConfig defaults and overrides."""

    def test_defaults(self, clean_env):
        config = OAuthConfig()

        assert config.port == 3000
        assert config.redirect_uri == "http://localhost:3000/oauth/callback"
        assert config.callback_path == "/oauth/callback"
        assert config.callback_host == "127.0.0.1"
        assert config.callback_timeout is None
        assert config.token_path == os.path.join(
            os.path.expanduser("~/.config/sheets-synapsis"), "oauth-tokens.json"
        )
        assert config.log_level == "INFO"
        assert not config.is_configured()

    def test_port_changes_redirect(self, clean_env):
        clean_env.setenv("SHEETS_SYNAPSIS_PORT", "8765")
        config = OAuthConfig()
        assert config.port == 8765
        assert config.redirect_uri == "http://localhost:8765/oauth/callback"

    def test_redirect_uri_sets_callback_path(self, clean_env):
        clean_env.setenv("SHEETS_SYNAPSIS_REDIRECT_URI", "http://localhost:3000/custom/cb")
        assert OAuthConfig().callback_path == "/custom/cb"

    def test_fallback_variable_names(self, clean_env):
        clean_env.setenv("GOOGLE_CLIENT_ID", "legacy-id")
        clean_env.setenv("GOOGLE_CLIENT_SECRET", "legacy-secret")
        config = OAuthConfig()
        assert config.client_id == "legacy-id"
        assert config.is_configured()

    def test_primary_names_win(self, clean_env):
        clean_env.setenv("GOOGLE_OAUTH_CLIENT_ID", "primary")
        clean_env.setenv("GOOGLE_CLIENT_ID", "legacy")
        assert OAuthConfig().client_id == "primary"

    def test_redirect_uri_port_decides_listener_port(self, clean_env, tmp_path):
        clean_env.setenv("SHEETS_SYNAPSIS_REDIRECT_URI", "http://localhost:8765/oauth/callback")
        config = OAuthConfig()
        assert config.port == 8765
        assert config.redirect_uri == "http://localhost:8765/oauth/callback"

        manager = GoogleAuthManager(
            config=config,
            token_store=TokenStore(str(tmp_path / "tokens.json")),
            token_client=MagicMock(),
        )
        listener = manager._callback_server
        assert listener.port == 8765
        assert listener.callback_path == "/oauth/callback"

    def test_port_mismatch_fails_validation(self, clean_env):
        clean_env.setenv("GOOGLE_OAUTH_CLIENT_ID", "id")
        clean_env.setenv("GOOGLE_OAUTH_CLIENT_SECRET", "secret")
        clean_env.setenv("SHEETS_SYNAPSIS_PORT", "3000")
        clean_env.setenv("SHEETS_SYNAPSIS_REDIRECT_URI", "http://localhost:8765/oauth/callback")

        with pytest.raises(ConfigurationError, match="does not match"):
            OAuthConfig().validate()

    def test_matching_ports_pass_validation(self, clean_env):
        clean_env.setenv("GOOGLE_OAUTH_CLIENT_ID", "id")
        clean_env.setenv("GOOGLE_OAUTH_CLIENT_SECRET", "secret")
        clean_env.setenv("SHEETS_SYNAPSIS_PORT", "8765")
        clean_env.setenv("SHEETS_SYNAPSIS_REDIRECT_URI", "http://localhost:8765/oauth/callback")

        config = OAuthConfig()
        config.validate()
        assert config.port == 8765

    @pytest.mark.parametrize("value", ["abc", "70000"])
    def test_malformed_port_is_configuration_error(self, clean_env, value):
        clean_env.setenv("SHEETS_SYNAPSIS_PORT", value)
        with pytest.raises(ConfigurationError, match="SHEETS_SYNAPSIS_PORT"):
            OAuthConfig()

    def test_callback_timeout(self, clean_env):
        clean_env.setenv("SHEETS_SYNAPSIS_CALLBACK_TIMEOUT", "120")
        assert OAuthConfig().callback_timeout == 120.0

    def test_malformed_timeout_is_configuration_error(self, clean_env):
        clean_env.setenv("SHEETS_SYNAPSIS_CALLBACK_TIMEOUT", "2m")
        with pytest.raises(ConfigurationError, match="SHEETS_SYNAPSIS_CALLBACK_TIMEOUT"):
            OAuthConfig()

    @pytest.mark.parametrize("value", ["0", "-5"])
    def test_non_positive_timeout_means_none(self, clean_env, value):
        clean_env.setenv("SHEETS_SYNAPSIS_CALLBACK_TIMEOUT", value)
        assert OAuthConfig().callback_timeout is None

    def test_validate_lists_missing_fields(self, clean_env):
        clean_env.setenv("GOOGLE_OAUTH_CLIENT_ID", "id")
        with pytest.raises(ConfigurationError, match="GOOGLE_OAUTH_CLIENT_SECRET"):
            OAuthConfig().validate()

    def test_summary_excludes_secret(self, oauth_config):
        summary = oauth_config.get_environment_summary()
        assert "client-secret" not in repr(summary)
        assert summary["client_configured"] is True

    def test_reload_replaces_global(self, clean_env):
        first = get_oauth_config()
        clean_env.setenv("SHEETS_SYNAPSIS_PORT", "4000")
        second = reload_oauth_config()
        assert second is not first
        assert get_oauth_config().port == 4000

        clean_env.delenv("SHEETS_SYNAPSIS_PORT")
        reload_oauth_config()


class TestCoreConfig:
    """Tests for environment loading and logging setup."""

    def test_load_environment_calls_dotenv(self, clean_env):
        clean_env.setenv("GOOGLE_OAUTH_CLIENT_ID", "from-env")

        with patch("sheets_synapsis.core.config.load_dotenv") as mock_load:
            config = load_environment()

        mock_load.assert_called_once_with()
        assert config.client_id == "from-env"
        assert get_oauth_config() is config

    def test_configure_logging_level(self):
        configure_logging("debug")
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("uvicorn").level == logging.WARNING
        configure_logging()
        assert logging.getLogger().level == logging.INFO
