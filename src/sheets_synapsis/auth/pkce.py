"""PKCE verifier/challenge and anti-CSRF state generation (RFC 7636, S256)."""

import base64
import hashlib
import secrets

from .models import PkceChallenge

VERIFIER_BYTES = 32
STATE_BYTES = 16


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def generate_code_verifier() -> str:
    """Random URL-safe verifier (43 characters for 32 bytes)."""
    return _b64url(secrets.token_bytes(VERIFIER_BYTES))


def generate_code_challenge(verifier: str) -> str:
    """S256 challenge: base64url(SHA-256(verifier)) without padding."""
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    return _b64url(digest)


def generate_state() -> str:
    """Random hex state token for CSRF protection."""
    return secrets.token_hex(STATE_BYTES)


def generate_challenge() -> PkceChallenge:
    """Generate a fresh verifier, its challenge and a state token."""
    verifier = generate_code_verifier()
    return PkceChallenge(
        verifier=verifier,
        challenge=generate_code_challenge(verifier),
        state=generate_state(),
    )
