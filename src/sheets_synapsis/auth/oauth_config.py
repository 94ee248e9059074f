"""
OAuth Configuration Management for Sheets Synapsis.

This module centralizes OAuth-related configuration to eliminate hardcoded values.
Values come from the environment (optionally seeded from a .env file).
"""

import os
from typing import List, Optional, Dict, Any
from urllib.parse import urlparse

from .scopes import get_scopes
from ..utils.constants import (
    DEFAULT_CALLBACK_HOST,
    DEFAULT_CALLBACK_PATH,
    DEFAULT_CALLBACK_PORT,
    GOOGLE_AUTH_URI,
    GOOGLE_TOKEN_URI,
    TOKEN_FILE_NAME,
)
from ..utils.errors import ConfigurationError


def _first_env(*names: str) -> Optional[str]:
    """Return the first non-empty environment variable among names."""
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


TIMEOUT_ENV_VAR = "SHEETS_SYNAPSIS_CALLBACK_TIMEOUT"


def _parse_port(value: Optional[str], name: str) -> Optional[int]:
    if not value:
        return None
    try:
        port = int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer port, got {value!r}") from None
    if not 0 < port < 65536:
        raise ConfigurationError(f"{name} must be between 1 and 65535, got {port}")
    return port


def _parse_timeout(value: Optional[str]) -> Optional[float]:
    """Seconds to wait for the OAuth callback; unset or <= 0 means no timeout."""
    if not value:
        return None
    try:
        timeout = float(value)
    except ValueError:
        raise ConfigurationError(
            f"{TIMEOUT_ENV_VAR} must be a number of seconds, got {value!r}"
        ) from None
    return timeout if timeout > 0 else None


class OAuthConfig:
    """
    Centralized OAuth configuration management.

    Provides a single source of truth for all OAuth-related configuration values.
    """

    def __init__(self) -> None:
        # OAuth client configuration
        self.client_id = _first_env("GOOGLE_OAUTH_CLIENT_ID", "GOOGLE_CLIENT_ID")
        self.client_secret = _first_env(
            "GOOGLE_OAUTH_CLIENT_SECRET", "GOOGLE_CLIENT_SECRET"
        )
        self.auth_uri = GOOGLE_AUTH_URI
        self.token_uri = GOOGLE_TOKEN_URI
        self.scopes: List[str] = get_scopes()

        # Callback listener; an explicit redirect URI port decides where it binds
        self.port_setting = _parse_port(
            _first_env("SHEETS_SYNAPSIS_PORT", "PORT"), "SHEETS_SYNAPSIS_PORT"
        )
        self.callback_host = DEFAULT_CALLBACK_HOST
        redirect_setting = _first_env("SHEETS_SYNAPSIS_REDIRECT_URI", "GOOGLE_REDIRECT_URI")
        redirect = urlparse(redirect_setting) if redirect_setting else None
        try:
            self.redirect_port = redirect.port if redirect else None
        except ValueError:
            raise ConfigurationError(
                f"SHEETS_SYNAPSIS_REDIRECT_URI has an invalid port: {redirect_setting!r}"
            ) from None
        self.port = self.redirect_port or self.port_setting or DEFAULT_CALLBACK_PORT
        self.redirect_uri = (
            redirect_setting or f"http://localhost:{self.port}{DEFAULT_CALLBACK_PATH}"
        )
        self.callback_path = (redirect.path if redirect else "") or DEFAULT_CALLBACK_PATH

        self.callback_timeout = _parse_timeout(os.getenv(TIMEOUT_ENV_VAR))

        # Token persistence
        self.config_dir = os.path.expanduser(
            os.getenv("SHEETS_SYNAPSIS_CONFIG_DIR", "~/.config/sheets-synapsis")
        )
        self.token_path = os.path.expanduser(
            os.getenv(
                "SHEETS_SYNAPSIS_TOKEN_FILE",
                os.path.join(self.config_dir, TOKEN_FILE_NAME),
            )
        )

        # Server
        self.server_name = os.getenv("MCP_SERVER_NAME", "Sheets Synapsis")
        self.log_level = (
            _first_env("SHEETS_SYNAPSIS_LOG_LEVEL", "LOG_LEVEL") or "INFO"
        ).upper()

        # PKCE (S256) is always used
        self.pkce_required = True

    def is_configured(self) -> bool:
        """Check if OAuth client credentials are present."""
        return bool(self.client_id and self.client_secret)

    def validate(self) -> None:
        """
        Ensure the configuration can drive an OAuth flow.

        Raises:
            ConfigurationError: If client credentials are missing or the
                callback port disagrees with the redirect URI.
        """
        missing = []
        if not self.client_id:
            missing.append("GOOGLE_OAUTH_CLIENT_ID")
        if not self.client_secret:
            missing.append("GOOGLE_OAUTH_CLIENT_SECRET")
        if missing:
            raise ConfigurationError(
                f"Configuration validation failed. Missing or invalid fields: "
                f"{', '.join(missing)}"
            )
        if self.port_setting and self.redirect_port and self.port_setting != self.redirect_port:
            raise ConfigurationError(
                f"SHEETS_SYNAPSIS_PORT ({self.port_setting}) does not match the port "
                f"of SHEETS_SYNAPSIS_REDIRECT_URI ({self.redirect_uri})"
            )

    def get_environment_summary(self) -> Dict[str, Any]:
        """Get a summary of the current OAuth configuration (excluding secrets)."""
        return {
            "redirect_uri": self.redirect_uri,
            "callback_listener": f"{self.callback_host}:{self.port}{self.callback_path}",
            "callback_timeout": self.callback_timeout,
            "token_path": self.token_path,
            "scopes": self.scopes,
            "client_configured": self.is_configured(),
            "pkce_required": self.pkce_required,
        }


# Global configuration instance
_oauth_config: Optional[OAuthConfig] = None


def get_oauth_config() -> OAuthConfig:
    """Get the global OAuth configuration instance."""
    global _oauth_config
    if _oauth_config is None:
        _oauth_config = OAuthConfig()
    return _oauth_config


def reload_oauth_config() -> OAuthConfig:
    """Reload the OAuth configuration from environment variables."""
    global _oauth_config
    _oauth_config = OAuthConfig()
    return _oauth_config

