"""
User repository port (interface).

This defines the contract for user persistence operations.
Implementations are in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import Optional

from access.domain.user import User


class UserRepository(ABC):
    """Abstract repository for User entities."""

    @abstractmethod
    async def find_by_discord_id(self, discord_id: str) -> Optional[User]:
        """
        Find a user by Discord ID.

        Args:
            discord_id: Caller identity

        Returns:
            User entity or None if not found
        """
        pass

    @abstractmethod
    async def upsert(self, user: User) -> User:
        """
        Create the user if absent, otherwise update it in place.

        Implementations must never create a second record for the
        same Discord ID.

        Args:
            user: User entity carrying the desired state

        Returns:
            Stored user entity
        """
        pass
