"""
Key DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from keys.domain.key import Key, KeyStats


@dataclass
class KeyDTO:
    """DTO for key information."""

    key: str
    app_id: str
    status: str
    created_at: datetime
    expires_at: Optional[datetime]
    user_discord_id: Optional[str]

    @classmethod
    def from_entity(cls, key: Key) -> "KeyDTO":
        """Build a DTO from a Key entity."""
        return cls(
            key=key.key,
            app_id=key.app_id,
            status=key.status.value,
            created_at=key.created_at,
            expires_at=key.expires_at,
            user_discord_id=key.user_discord_id,
        )


@dataclass
class IssuedKeysDTO:
    """DTO for the result of an issuance."""

    keys: List[KeyDTO]

    @property
    def tokens(self) -> List[str]:
        """Issued key tokens, in issuance order."""
        return [key.key for key in self.keys]


@dataclass
class DeletedKeysDTO:
    """DTO for the result of a deletion."""

    deleted_count: int


@dataclass
class KeyStatsDTO:
    """DTO for per-application key counts."""

    total_keys: int
    unused_keys: int
    used_keys: int

    @classmethod
    def from_stats(cls, stats: KeyStats) -> "KeyStatsDTO":
        """Build a DTO from KeyStats."""
        return cls(total_keys=stats.total, unused_keys=stats.unused, used_keys=stats.used)
