"""
Token endpoint client for Sheets Synapsis.

Exchanges authorization codes (with the PKCE verifier) and refresh tokens
for access tokens at Google's OAuth token endpoint.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from .models import TokenSet
from .oauth_config import OAuthConfig
from ..utils.errors import TokenExchangeError, TokenRefreshError

logger = logging.getLogger(__name__)

TOKEN_REQUEST_TIMEOUT = 30.0


def _error_summary(response: httpx.Response) -> str:
    """Provider error code from a token endpoint failure, for logs only."""
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return f"HTTP {response.status_code} ({body['error']})"
    return f"HTTP {response.status_code}"


class TokenClient:
    """Talks to the OAuth provider's authorization and token endpoints."""

    def __init__(
        self, config: OAuthConfig, http_client: Optional[httpx.AsyncClient] = None
    ) -> None:
        self.config = config
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=TOKEN_REQUEST_TIMEOUT)

    def build_authorization_url(self, code_challenge: str, state: str) -> str:
        """
        Build the consent-screen URL bound to one PKCE challenge and state.

        Args:
            code_challenge: S256 challenge derived from the flow's verifier.
            state: Anti-CSRF token the callback must echo back.

        Returns:
            Fully-formed authorization URL.
        """
        params = {
            "client_id": self.config.client_id,
            "redirect_uri": self.config.redirect_uri,
            "response_type": "code",
            "scope": " ".join(self.config.scopes),
            "access_type": "offline",
            "prompt": "consent",
            "code_challenge_method": "S256",
            "code_challenge": code_challenge,
            "state": state,
        }
        return f"{self.config.auth_uri}?{urlencode(params)}"

    async def exchange(self, code: str, verifier: str) -> TokenSet:
        """
        Trade an authorization code for a token set.

        Raises:
            TokenExchangeError: On network failure or provider rejection.
        """
        payload = {
            "grant_type": "authorization_code",
            "code": code,
            "code_verifier": verifier,
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "redirect_uri": self.config.redirect_uri,
        }
        try:
            body = await self._post(payload)
        except httpx.HTTPStatusError as e:
            summary = _error_summary(e.response)
            logger.error(f"Authorization code exchange rejected: {summary}")
            raise TokenExchangeError(
                "Failed to exchange authorization code for tokens",
                status_code=e.response.status_code,
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Authorization code exchange failed: {e}")
            raise TokenExchangeError(
                "Failed to exchange authorization code for tokens"
            ) from e

        tokens = TokenSet.from_token_response(body)
        logger.info("Successfully exchanged authorization code for tokens")
        return tokens

    async def refresh(self, refresh_token: str) -> TokenSet:
        """
        Mint a new access token from a refresh token.

        Raises:
            TokenRefreshError: For any failure, so callers can fall back to
                               interactive authentication.
        """
        payload = {
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
        }
        try:
            body = await self._post(payload)
            tokens = TokenSet.from_token_response(
                body, previous_refresh_token=refresh_token
            )
        except httpx.HTTPStatusError as e:
            summary = _error_summary(e.response)
            logger.warning(f"Token refresh rejected: {summary}")
            raise TokenRefreshError(
                "Refresh token was rejected", status_code=e.response.status_code
            ) from e
        except (httpx.HTTPError, ValueError, TokenExchangeError) as e:
            logger.warning(f"Token refresh failed: {e}")
            raise TokenRefreshError("Token refresh failed") from e

        logger.info("Access token refreshed successfully")
        return tokens

    async def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = await self._http.post(
            self.config.token_uri,
            data=payload,
            headers={"Accept": "application/json"},
        )
        response.raise_for_status()
        body = response.json()
        if not isinstance(body, dict):
            raise ValueError("Token endpoint returned a non-object body")
        return body

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()
