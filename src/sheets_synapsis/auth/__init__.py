"""
OAuth Authentication Package for Sheets Synapsis.

This package provides the interactive authorization-code flow with:
- PKCE (S256) and anti-CSRF state generation
- A one-shot loopback callback server
- Atomic, owner-only token persistence
- Silent refresh and single-flight re-authentication
"""

from .scopes import SCOPES, get_scopes
from .models import TokenSet, PkceChallenge, PendingFlow
from .pkce import generate_challenge
from .token_store import TokenStore
from .token_client import TokenClient
from .browser import BrowserLauncher
from .oauth_callback_server import OAuthCallbackServer
from .oauth_config import OAuthConfig, get_oauth_config, reload_oauth_config
from .google_auth import GoogleAuthManager

__all__ = [
    # Scopes
    "SCOPES",
    "get_scopes",
    # Models
    "TokenSet",
    "PkceChallenge",
    "PendingFlow",
    # Flow components
    "generate_challenge",
    "TokenStore",
    "TokenClient",
    "BrowserLauncher",
    "OAuthCallbackServer",
    # Configuration
    "OAuthConfig",
    "get_oauth_config",
    "reload_oauth_config",
    # Orchestrator
    "GoogleAuthManager",
]
