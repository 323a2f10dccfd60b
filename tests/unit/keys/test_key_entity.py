"""
Unit tests for Key entity.
"""

import re
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import InvalidKeyStatusError
from core.domain.value_objects import Duration, KeyStatus
from keys.domain.key import Key, generate_key_token

ISSUED_AT = datetime(2024, 1, 1, tzinfo=timezone.utc)


class TestGenerateKeyToken:
    """Tests for key token generation."""

    def test_token_is_sixteen_uppercase_hex_chars(self):
        """Test token format."""
        token = generate_key_token()
        assert re.fullmatch(r"[0-9A-F]{16}", token)

    def test_tokens_differ(self):
        """Test consecutive tokens are not repeated."""
        tokens = {generate_key_token() for _ in range(50)}
        assert len(tokens) == 50


class TestKeyEntity:
    """Tests for Key entity."""

    def test_create_key_without_duration(self):
        """Test creating a key that never expires."""
        key = Key.create(app_id="app1", issued_at=ISSUED_AT, token="ABCDEF0123456789")

        assert key.key == "ABCDEF0123456789"
        assert key.app_id == "app1"
        assert key.status == KeyStatus.UNUSED
        assert key.created_at == ISSUED_AT
        assert key.expires_at is None
        assert key.user_discord_id is None

    def test_create_key_with_duration(self):
        """Test expiry is issuance time plus whole days."""
        key = Key.create(app_id="app1", duration=Duration(7), issued_at=ISSUED_AT)

        assert key.expires_at == ISSUED_AT + timedelta(days=7)

    def test_create_generates_token(self):
        """Test a token is generated when none is given."""
        key = Key.create(app_id="app1")
        assert re.fullmatch(r"[0-9A-F]{16}", key.key)

    def test_empty_key_rejected(self):
        """Test key validation - empty token."""
        with pytest.raises(ValueError, match="cannot be empty"):
            Key(key="  ", app_id="app1", status=KeyStatus.UNUSED, created_at=ISSUED_AT)

    def test_missing_app_rejected(self):
        """Test key validation - missing application."""
        with pytest.raises(ValueError, match="Application ID is required"):
            Key(key="A" * 16, app_id="", status=KeyStatus.UNUSED, created_at=ISSUED_AT)

    def test_expiry_before_creation_rejected(self):
        """Test key validation - expiry precedes creation."""
        with pytest.raises(ValueError, match="cannot expire before"):
            Key(
                key="A" * 16,
                app_id="app1",
                status=KeyStatus.UNUSED,
                created_at=ISSUED_AT,
                expires_at=ISSUED_AT - timedelta(seconds=1),
            )

    def test_is_expired(self):
        """Test expiry check against the clock."""
        key = Key.create(app_id="app1", duration=Duration(1), issued_at=ISSUED_AT)

        assert key.is_expired(ISSUED_AT + timedelta(hours=23)) is False
        assert key.is_expired(ISSUED_AT + timedelta(days=1, seconds=1)) is True

    def test_key_without_expiry_never_expires(self):
        """Test a key without expiry is never expired."""
        key = Key.create(app_id="app1", issued_at=ISSUED_AT)
        assert key.is_expired(ISSUED_AT + timedelta(days=10000)) is False

    def test_mark_used(self):
        """Test marking a key as used."""
        key = Key.create(app_id="app1", issued_at=ISSUED_AT)
        used = key.mark_used("1001")

        assert used.status == KeyStatus.USED
        assert used.user_discord_id == "1001"
        assert key.status == KeyStatus.UNUSED  # Original unchanged

    def test_mark_used_twice_rejected(self):
        """Test a used key cannot be used again."""
        used = Key.create(app_id="app1", issued_at=ISSUED_AT).mark_used("1001")

        with pytest.raises(InvalidKeyStatusError):
            used.mark_used("2002")

    def test_expired_key_cannot_be_used(self):
        """Test status never moves backwards."""
        expired = replace(Key.create(app_id="app1", issued_at=ISSUED_AT), status=KeyStatus.EXPIRED)

        with pytest.raises(InvalidKeyStatusError):
            expired.mark_used()
