"""
Key domain entity.

This is the core domain entity representing an issuable license key.
It contains business logic and is independent of infrastructure.
"""

import secrets
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.exceptions import InvalidKeyStatusError
from core.domain.value_objects import Duration, KeyStatus

KEY_TOKEN_BYTES = 8


def generate_key_token() -> str:
    """
    Generate a key token: 8 random bytes as 16 uppercase hex characters.

    Returns:
        Generated key token string
    """
    return secrets.token_hex(KEY_TOKEN_BYTES).upper()


@dataclass(frozen=True)
class Key:
    """
    Key domain entity.

    Represents one license token issued for an application.
    Status only moves forward: unused -> used -> expired.
    """

    key: str
    app_id: str
    status: KeyStatus
    created_at: datetime
    expires_at: Optional[datetime] = None
    user_discord_id: Optional[str] = None

    def __post_init__(self):
        """Validate key entity."""
        if not self.key or len(self.key.strip()) == 0:
            raise ValueError("Key cannot be empty")
        if len(self.key) > 100:
            raise ValueError("Key too long")
        if not self.app_id:
            raise ValueError("Application ID is required")
        if self.expires_at is not None and self.expires_at < self.created_at:
            raise ValueError("Key cannot expire before it is created")

    @classmethod
    def create(
        cls,
        app_id: str,
        duration: Optional[Duration] = None,
        issued_at: Optional[datetime] = None,
        token: Optional[str] = None,
    ) -> "Key":
        """
        Create a new, unused Key entity.

        Args:
            app_id: Owning application ID
            duration: Validity period, or None for a key that never expires
            issued_at: Issuance time (defaults to now, UTC)
            token: Key token (generated if not provided)

        Returns:
            Key entity instance
        """
        now = issued_at or datetime.now(timezone.utc)
        return cls(
            key=token or generate_key_token(),
            app_id=app_id,
            status=KeyStatus.UNUSED,
            created_at=now,
            expires_at=duration.expires_at(now) if duration else None,
        )

    def is_expired(self, current_time: Optional[datetime] = None) -> bool:
        """
        Check the expiry timestamp against the clock.

        The stored status is not consulted; it may lag behind wall-clock
        expiry.

        Args:
            current_time: Current time (defaults to now, UTC)

        Returns:
            True if the key has an expiry that lies in the past
        """
        if self.expires_at is None:
            return False
        return self.expires_at < (current_time or datetime.now(timezone.utc))

    def _transition(self, target: KeyStatus, **changes) -> "Key":
        if not self.status.can_transition_to(target):
            raise InvalidKeyStatusError(
                f"Key {self.key} cannot move from {self.status} to {target}"
            )
        return replace(self, status=target, **changes)

    def mark_used(self, user_discord_id: Optional[str] = None) -> "Key":
        """
        Create a new Key instance marked as used.

        Args:
            user_discord_id: Identity of the redeeming caller

        Returns:
            New Key instance with used status

        Raises:
            InvalidKeyStatusError: If the key is not unused
        """
        if self.status is not KeyStatus.UNUSED:
            raise InvalidKeyStatusError(f"Key {self.key} is already {self.status}")
        return self._transition(KeyStatus.USED, user_discord_id=user_discord_id)


@dataclass(frozen=True)
class KeyStats:
    """Per-application key counts. Expired keys are not broken out."""

    total: int
    unused: int
    used: int
