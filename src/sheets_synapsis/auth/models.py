"""Value types shared by the OAuth flow components."""

import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, TYPE_CHECKING

from ..utils.errors import TokenExchangeError

if TYPE_CHECKING:
    from .oauth_callback_server import OAuthCallbackServer


def now_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class TokenSet:
    """
    An access/refresh token pair as issued by the provider.

    Instances are immutable; exchange and refresh produce new values.
    ``expiry_date`` is in epoch milliseconds.
    """

    access_token: str
    refresh_token: Optional[str] = None
    expiry_date: Optional[int] = None

    def is_expired(self, now_ms: Optional[int] = None) -> bool:
        """Whether the access token's known expiry has passed."""
        if self.expiry_date is None:
            return False
        if now_ms is None:
            now_ms = now_millis()
        return now_ms >= self.expiry_date

    @property
    def can_refresh(self) -> bool:
        return bool(self.refresh_token)

    @classmethod
    def from_token_response(
        cls,
        payload: Mapping[str, Any],
        previous_refresh_token: Optional[str] = None,
        now_ms: Optional[int] = None,
    ) -> "TokenSet":
        """
        Build a TokenSet from a token endpoint response.

        Refresh responses usually omit ``refresh_token``; the previous one
        is carried over in that case.

        Raises:
            TokenExchangeError: If the response has no access token.
        """
        access_token = payload.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise TokenExchangeError("Token response missing access_token")

        refresh_token = payload.get("refresh_token") or previous_refresh_token

        expiry_date = payload.get("expiry_date")
        expires_in = payload.get("expires_in")
        if expiry_date is None and expires_in is not None:
            if now_ms is None:
                now_ms = now_millis()
            expiry_date = now_ms + int(expires_in) * 1000

        return cls(
            access_token=access_token,
            refresh_token=refresh_token,
            expiry_date=int(expiry_date) if expiry_date is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the on-disk token file layout."""
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "expiry_date": self.expiry_date,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "TokenSet":
        """
        Parse the on-disk token file layout.

        Raises:
            ValueError: If the mapping is not a well-formed token set.
        """
        if not isinstance(data, dict):
            raise ValueError("Token data must be a JSON object")

        access_token = data.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise ValueError("Token data missing access_token")

        refresh_token = data.get("refresh_token")
        if refresh_token is not None and not isinstance(refresh_token, str):
            raise ValueError("refresh_token must be a string or null")

        expiry_date = data.get("expiry_date")
        if expiry_date is not None:
            if isinstance(expiry_date, bool) or not isinstance(
                expiry_date, (int, float)
            ):
                raise ValueError("expiry_date must be a number or null")
            expiry_date = int(expiry_date)

        return cls(
            access_token=access_token,
            refresh_token=refresh_token or None,
            expiry_date=expiry_date,
        )


@dataclass(frozen=True)
class PkceChallenge:
    """Secrets for one authorization attempt."""

    verifier: str
    challenge: str
    state: str


@dataclass
class PendingFlow:
    """State of the single in-progress interactive authorization."""

    code_verifier: str
    expected_state: str
    listener: "OAuthCallbackServer"
