"""
Key repository port (interface).

This defines the contract for key persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from core.domain.value_objects import KeyStatus
from keys.domain.key import Key


class KeyRepository(ABC):
    """
    Abstract repository for Key entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def add(self, key: Key) -> Key:
        """
        Insert a new key.

        Args:
            key: Key entity to insert

        Returns:
            Inserted key entity

        Raises:
            DuplicateKeyError: If the token already exists in the store
        """
        pass

    @abstractmethod
    async def add_many(self, keys: List[Key]) -> List[Key]:
        """
        Insert a batch of new keys atomically.

        Either every key is stored or none is.

        Args:
            keys: Key entities to insert

        Returns:
            Inserted key entities

        Raises:
            DuplicateKeyError: If any token already exists in the store
        """
        pass

    @abstractmethod
    async def update_status(self, key: Key, previous_status: KeyStatus) -> Key:
        """
        Persist the status and redeemer of an existing key.

        The update only applies while the stored status still equals
        ``previous_status``.

        Args:
            key: Key entity carrying the new state
            previous_status: Status the stored key must currently have

        Returns:
            Updated key entity

        Raises:
            KeyNotFoundError: If the key does not exist
            InvalidKeyStatusError: If the stored status changed meanwhile
        """
        pass

    @abstractmethod
    async def find_by_key(self, key: str) -> Optional[Key]:
        """
        Find a key by its token.

        Args:
            key: Key token (exact match)

        Returns:
            Key entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_app(self, app_id: str) -> List[Key]:
        """
        List every key of an application.

        Args:
            app_id: Application ID

        Returns:
            List of Key entities, in store order
        """
        pass

    @abstractmethod
    async def count(self, app_id: str, status: Optional[KeyStatus] = None) -> int:
        """
        Count keys of an application, optionally by status.

        Args:
            app_id: Application ID
            status: Status filter, or None for all keys

        Returns:
            Number of matching keys
        """
        pass

    @abstractmethod
    async def delete_by_key(self, key: str) -> int:
        """
        Delete a key by its token.

        Args:
            key: Key token (exact match)

        Returns:
            Number of deleted keys (0 or 1)
        """
        pass

    @abstractmethod
    async def delete_expired(self, app_id: str, now: datetime) -> int:
        """
        Delete keys of an application whose expiry lies before ``now``.

        Keys without an expiry are never deleted.

        Args:
            app_id: Application ID
            now: Reference time

        Returns:
            Number of deleted keys
        """
        pass
