"""Unit tests for the token value types."""
import pytest

from sheets_synapsis.auth.models import TokenSet
from sheets_synapsis.utils.errors import TokenExchangeError


class TestTokenSetExpiry:
    """Tests for expiry evaluation."""

    def test_not_expired_before_expiry(self):
        tokens = TokenSet("access", expiry_date=2_000)
        assert not tokens.is_expired(now_ms=1_999)

    def test_expired_at_expiry_instant(self):
        tokens = TokenSet("access", expiry_date=2_000)
        assert tokens.is_expired(now_ms=2_000)
        assert tokens.is_expired(now_ms=5_000)

    def test_unknown_expiry_is_not_expired(self):
        assert not TokenSet("access").is_expired(now_ms=10**15)

    def test_can_refresh(self):
        assert TokenSet("a", refresh_token="r").can_refresh
        assert not TokenSet("a").can_refresh
        assert not TokenSet("a", refresh_token="").can_refresh


class TestFromTokenResponse:
    """Tests for building tokens from provider responses."""

    def test_expires_in_is_converted_to_epoch_ms(self):
        tokens = TokenSet.from_token_response(
            {"access_token": "a", "refresh_token": "r", "expires_in": 3600},
            now_ms=1_000,
        )
        assert tokens == TokenSet("a", "r", 1_000 + 3_600_000)

    def test_keeps_previous_refresh_token(self):
        tokens = TokenSet.from_token_response(
            {"access_token": "new", "expires_in": 60},
            previous_refresh_token="old-refresh",
            now_ms=0,
        )
        assert tokens.refresh_token == "old-refresh"

    def test_new_refresh_token_wins(self):
        tokens = TokenSet.from_token_response(
            {"access_token": "new", "refresh_token": "rotated"},
            previous_refresh_token="old-refresh",
        )
        assert tokens.refresh_token == "rotated"
        assert tokens.expiry_date is None

    def test_missing_access_token_raises(self):
        with pytest.raises(TokenExchangeError):
            TokenSet.from_token_response({"token_type": "Bearer"})


class TestTokenFileLayout:
    """Tests for the on-disk dict form."""

    def test_to_dict_field_names(self):
        assert TokenSet("a", "r", 42).to_dict() == {
            "access_token": "a",
            "refresh_token": "r",
            "expiry_date": 42,
        }

    def test_from_dict_accepts_nulls(self):
        tokens = TokenSet.from_dict(
            {"access_token": "a", "refresh_token": None, "expiry_date": None}
        )
        assert tokens == TokenSet("a")

    @pytest.mark.parametrize("data", [
        [],
        {},
        {"access_token": ""},
        {"access_token": "a", "refresh_token": 5},
        {"access_token": "a", "expiry_date": "soon"},
        {"access_token": "a", "expiry_date": True},
    ])
    def test_from_dict_rejects_malformed(self, data):
        with pytest.raises(ValueError):
            TokenSet.from_dict(data)
