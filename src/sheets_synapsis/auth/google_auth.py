"""
Core Google OAuth Logic for Sheets Synapsis.

This module owns the token lifecycle: it decides whether the held token is
usable, refreshes it silently when possible, and otherwise runs the
interactive authorization-code + PKCE flow. Concurrent callers share a
single in-flight attempt.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from .browser import BrowserLauncher
from .models import PendingFlow, TokenSet
from .oauth_callback_server import OAuthCallbackServer
from .oauth_config import OAuthConfig, get_oauth_config
from .pkce import generate_challenge
from .token_client import TokenClient
from .token_store import TokenStore
from ..utils.errors import AuthenticationError, TokenRefreshError, TokenStoreError

logger = logging.getLogger(__name__)


class GoogleAuthManager:
    """
    Auth orchestrator for one Google account.

    The current TokenSet lives in a slot owned by this instance and is
    replaced wholesale after a successful exchange or refresh. API handles
    are built from a snapshot of it.
    """

    def __init__(
        self,
        config: Optional[OAuthConfig] = None,
        token_store: Optional[TokenStore] = None,
        token_client: Optional[TokenClient] = None,
        browser: Optional[BrowserLauncher] = None,
        callback_server: Optional[OAuthCallbackServer] = None,
    ) -> None:
        self.config = config or get_oauth_config()
        self._store = token_store or TokenStore(self.config.token_path)
        self._token_client = token_client or TokenClient(self.config)
        self._browser = browser or BrowserLauncher()
        self._callback_server = callback_server or OAuthCallbackServer(
            port=self.config.port,
            host=self.config.callback_host,
            callback_path=self.config.callback_path,
        )

        self._inflight: Optional[asyncio.Task] = None
        self._pending: Optional[PendingFlow] = None
        self._browser_task: Optional[asyncio.Task] = None

        self._tokens: Optional[TokenSet] = self._store.load()
        if self._tokens:
            logger.info("Google Auth manager initialized with stored tokens")
        else:
            logger.warning("No stored tokens found, authentication required")

    @property
    def tokens(self) -> Optional[TokenSet]:
        return self._tokens

    @property
    def pending_flow(self) -> Optional[PendingFlow]:
        return self._pending

    def _has_usable_token(self) -> bool:
        return self._tokens is not None and not self._tokens.is_expired()

    async def ensure_authenticated(self) -> None:
        """
        Suspend until a usable access token is held.

        Raises:
            AuthenticationError: If refresh and interactive authentication
                                 both failed. Every joined caller receives it.
        """
        if self._has_usable_token():
            return
        await self._join(force=False)

    async def reauthenticate(self) -> None:
        """Run the interactive flow even if the held token is still valid."""
        await self._join(force=True)

    async def _join(self, force: bool) -> None:
        if self._inflight is None:
            task = asyncio.create_task(self._authorize(force=force))
            task.add_done_callback(self._clear_inflight)
            self._inflight = task
        # A cancelled caller leaves the shared attempt running
        await asyncio.shield(self._inflight)

    def _clear_inflight(self, task: asyncio.Task) -> None:
        if self._inflight is task:
            self._inflight = None
        if not task.cancelled():
            # Mark retrieved; joined callers already received it
            task.exception()

    async def _authorize(self, force: bool = False) -> None:
        tokens = self._tokens

        if not force:
            if tokens is not None and not tokens.is_expired():
                return

            if tokens is not None and tokens.can_refresh:
                logger.info("Access token expired, refreshing...")
                try:
                    refreshed = await self._token_client.refresh(tokens.refresh_token)
                except asyncio.CancelledError:
                    raise
                except TokenRefreshError as e:
                    logger.warning(f"Token refresh not possible ({e}), re-authentication required")
                except Exception as e:
                    logger.warning(
                        f"Token refresh failed unexpectedly ({e}), re-authentication required",
                        exc_info=True,
                    )
                else:
                    await self._publish(refreshed)
                    return
            elif tokens is not None:
                logger.warning("No refresh token available, re-authentication required")

        try:
            await self._run_authorization_flow()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"OAuth authentication failed: {e}", exc_info=True)
            raise AuthenticationError("Failed to authenticate with Google APIs") from e

    async def _run_authorization_flow(self) -> None:
        logger.info("Starting OAuth authentication flow...")
        self.config.validate()

        pkce = generate_challenge()
        auth_url = self._token_client.build_authorization_url(pkce.challenge, pkce.state)
        logger.info("OAuth authorization URL generated")

        listener = self._callback_server
        await listener.start(pkce.state)
        self._pending = PendingFlow(
            code_verifier=pkce.verifier, expected_state=pkce.state, listener=listener
        )
        try:
            # The listener is bound before the user can reach the provider
            self._browser_task = asyncio.create_task(self._browser.open_async(auth_url))
            code = await listener.wait_for_code(timeout=self.config.callback_timeout)
        finally:
            self._pending = None

        tokens = await self._token_client.exchange(code, pkce.verifier)
        await self._publish(tokens)
        logger.info("OAuth authentication completed successfully")

    async def _publish(self, tokens: TokenSet) -> None:
        """Persist tokens, then make them visible to callers."""
        try:
            await asyncio.to_thread(self._store.save, tokens)
        except TokenStoreError as e:
            # Tokens remain usable in memory for this process
            logger.error(f"Failed to persist OAuth tokens: {e}")
        self._tokens = tokens

    async def get_credentials(self) -> Credentials:
        """
        Get google-auth credentials for the current access token.

        A fresh Credentials object is built per call so API handles never
        share mutable state with the token slot.
        """
        await self.ensure_authenticated()
        tokens = self._tokens
        if tokens is None:
            raise AuthenticationError("Failed to authenticate with Google APIs")
        return Credentials(token=tokens.access_token, scopes=self.config.scopes)

    async def get_sheets_service(self) -> Any:
        """Authenticated Sheets v4 discovery client."""
        credentials = await self.get_credentials()
        return build("sheets", "v4", credentials=credentials, cache_discovery=False)

    async def get_drive_service(self) -> Any:
        """Authenticated Drive v3 discovery client."""
        credentials = await self.get_credentials()
        return build("drive", "v3", credentials=credentials, cache_discovery=False)

    def get_status(self) -> Dict[str, Any]:
        """Describe the held credentials without exposing any secret."""
        tokens = self._tokens
        expiry = None
        if tokens is not None and tokens.expiry_date is not None:
            expiry = datetime.fromtimestamp(
                tokens.expiry_date / 1000, tz=timezone.utc
            ).isoformat()
        return {
            "authenticated": self._has_usable_token(),
            "has_refresh_token": bool(tokens and tokens.can_refresh),
            "expires_at": expiry,
            "flow_in_progress": self._inflight is not None,
            "awaiting_callback": self._pending is not None,
            "token_path": self._store.path,
            "client_configured": self.config.is_configured(),
        }

    async def aclose(self) -> None:
        """Release the callback port and close HTTP resources."""
        await self._callback_server.stop()
        inflight = self._inflight
        if inflight is not None:
            inflight.cancel()
            await asyncio.gather(inflight, return_exceptions=True)
        await self._token_client.aclose()
