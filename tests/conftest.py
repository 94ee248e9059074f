"""Shared fixtures for Sheets Synapsis tests."""
import os

import pytest

from sheets_synapsis.auth.oauth_config import OAuthConfig

OAUTH_ENV_VARS = [
    "GOOGLE_OAUTH_CLIENT_ID",
    "GOOGLE_CLIENT_ID",
    "GOOGLE_OAUTH_CLIENT_SECRET",
    "GOOGLE_CLIENT_SECRET",
    "SHEETS_SYNAPSIS_PORT",
    "PORT",
    "SHEETS_SYNAPSIS_REDIRECT_URI",
    "GOOGLE_REDIRECT_URI",
    "SHEETS_SYNAPSIS_CONFIG_DIR",
    "SHEETS_SYNAPSIS_TOKEN_FILE",
    "SHEETS_SYNAPSIS_CALLBACK_TIMEOUT",
    "SHEETS_SYNAPSIS_LOG_LEVEL",
    "LOG_LEVEL",
    "MCP_SERVER_NAME",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Environment with no OAuth-related variables set."""
    for name in OAUTH_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def oauth_config(clean_env, tmp_path) -> OAuthConfig:
    """A fully configured OAuthConfig writing tokens under tmp_path."""
    clean_env.setenv("GOOGLE_OAUTH_CLIENT_ID", "client-id.apps.googleusercontent.com")
    clean_env.setenv("GOOGLE_OAUTH_CLIENT_SECRET", "client-secret")
    clean_env.setenv(
        "SHEETS_SYNAPSIS_TOKEN_FILE", os.path.join(str(tmp_path), "tokens", "oauth-tokens.json")
    )
    return OAuthConfig()
