"""
Key lifecycle handlers.

Handlers for delete, delete-expired and mark-used commands.
"""

from core.metrics import keys_deleted_total
from keys.application.commands.delete_keys import DeleteExpiredKeysCommand, DeleteKeyCommand
from keys.application.commands.mark_key_used import MarkKeyUsedCommand
from keys.application.dto.key_dto import DeletedKeysDTO, KeyDTO
from keys.domain.services import KeyLifecycleManager


class DeleteKeyHandler:
    """Handler for DeleteKeyCommand."""

    def __init__(self, key_manager: KeyLifecycleManager):
        """Initialize handler with the key lifecycle manager."""
        self.key_manager = key_manager

    async def handle(self, command: DeleteKeyCommand) -> DeletedKeysDTO:
        """
        Handle delete key command.

        Args:
            command: DeleteKeyCommand

        Returns:
            DeletedKeysDTO

        Raises:
            KeyNotFoundError: If key not found
        """
        deleted = await self.key_manager.delete_one(command.key)
        keys_deleted_total.labels(reason="revoked").inc(deleted)
        return DeletedKeysDTO(deleted_count=deleted)


class DeleteExpiredKeysHandler:
    """Handler for DeleteExpiredKeysCommand."""

    def __init__(self, key_manager: KeyLifecycleManager):
        """Initialize handler with the key lifecycle manager."""
        self.key_manager = key_manager

    async def handle(self, command: DeleteExpiredKeysCommand) -> DeletedKeysDTO:
        """
        Handle delete expired keys command.

        Args:
            command: DeleteExpiredKeysCommand

        Returns:
            DeletedKeysDTO, possibly with a zero count
        """
        deleted = await self.key_manager.delete_expired(command.app_id)
        keys_deleted_total.labels(reason="expired").inc(deleted)
        return DeletedKeysDTO(deleted_count=deleted)


class MarkKeyUsedHandler:
    """Handler for MarkKeyUsedCommand."""

    def __init__(self, key_manager: KeyLifecycleManager):
        """Initialize handler with the key lifecycle manager."""
        self.key_manager = key_manager

    async def handle(self, command: MarkKeyUsedCommand) -> KeyDTO:
        """
        Handle mark key used command.

        Args:
            command: MarkKeyUsedCommand

        Returns:
            KeyDTO of the updated key

        Raises:
            KeyNotFoundError: If key not found
            InvalidKeyStatusError: If the key is not unused
        """
        key = await self.key_manager.mark_used(command.key, command.user_discord_id)
        return KeyDTO.from_entity(key)
