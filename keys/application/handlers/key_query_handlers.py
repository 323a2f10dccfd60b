"""
Key query handlers.

Read-only handlers: none of them change key status.
"""
from typing import List

from keys.application.dto.key_dto import KeyDTO, KeyStatsDTO
from keys.application.queries.application_keys import GetKeyStatsQuery, ListKeysQuery
from keys.application.queries.check_key import CheckKeyQuery
from keys.domain.services import KeyLifecycleManager


class CheckKeyHandler:
    """Handler for CheckKeyQuery."""

    def __init__(self, key_manager: KeyLifecycleManager):
        """Initialize handler with the key lifecycle manager."""
        self.key_manager = key_manager

    async def handle(self, query: CheckKeyQuery) -> KeyDTO:
        """
        Handle check key query.

        Args:
            query: CheckKeyQuery

        Returns:
            KeyDTO of the stored key

        Raises:
            KeyNotFoundError: If key not found
        """
        key = await self.key_manager.check(query.key)
        return KeyDTO.from_entity(key)


class ListKeysHandler:
    """Handler for ListKeysQuery."""

    def __init__(self, key_manager: KeyLifecycleManager):
        """Initialize handler with the key lifecycle manager."""
        self.key_manager = key_manager

    async def handle(self, query: ListKeysQuery) -> List[KeyDTO]:
        """Return every key of the application."""
        keys = await self.key_manager.list_all(query.app_id)
        return [KeyDTO.from_entity(key) for key in keys]


class GetKeyStatsHandler:
    """Handler for GetKeyStatsQuery."""

    def __init__(self, key_manager: KeyLifecycleManager):
        """Initialize handler with the key lifecycle manager."""
        self.key_manager = key_manager

    async def handle(self, query: GetKeyStatsQuery) -> KeyStatsDTO:
        """Return total, unused and used counts for the application."""
        stats = await self.key_manager.stats(query.app_id)
        return KeyStatsDTO.from_stats(stats)
