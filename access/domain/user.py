"""
User domain entity.

A user records whether a caller identity may invoke the key service.
"""

from dataclasses import dataclass, replace

from core.domain.value_objects import Entitlement


@dataclass(frozen=True)
class User:
    """
    User domain entity.

    Identified by the caller's Discord ID and carrying the bot entitlement flag.
    """

    discord_id: str
    is_bot_enabled: bool = True

    def __post_init__(self):
        """Validate user entity."""
        if not self.discord_id or len(self.discord_id.strip()) == 0:
            raise ValueError("Discord ID cannot be empty")
        if len(self.discord_id) > 100:
            raise ValueError("Discord ID too long")

    @property
    def entitlement(self) -> Entitlement:
        """Entitlement derived from the stored flag."""
        return Entitlement.ENABLED if self.is_bot_enabled else Entitlement.DISABLED

    def with_bot_enabled(self, enabled: bool) -> "User":
        """
        Create a new User instance with the given entitlement flag.

        Args:
            enabled: New value of the flag

        Returns:
            New User instance
        """
        return replace(self, is_bot_enabled=enabled)
