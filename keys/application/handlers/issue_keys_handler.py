"""
Key issuance handlers.

Handle the single and bulk issuance commands.
"""

from core.metrics import keys_issued_total
from keys.application.commands.issue_keys import IssueBulkKeysCommand, IssueKeyCommand
from keys.application.dto.key_dto import IssuedKeysDTO, KeyDTO
from keys.domain.services import KeyLifecycleManager


class IssueKeyHandler:
    """Handler for IssueKeyCommand."""

    def __init__(self, key_manager: KeyLifecycleManager):
        """Initialize handler with the key lifecycle manager."""
        self.key_manager = key_manager

    async def handle(self, command: IssueKeyCommand) -> IssuedKeysDTO:
        """
        Handle issue key command.

        Args:
            command: IssueKeyCommand

        Returns:
            IssuedKeysDTO holding the new key

        Raises:
            ApplicationNotFoundError: If application not found
            KeyConflictError: If no unique token could be stored
        """
        key = await self.key_manager.issue(command.app_id, command.duration_days)
        keys_issued_total.inc()
        return IssuedKeysDTO(keys=[KeyDTO.from_entity(key)])


class IssueBulkKeysHandler:
    """Handler for IssueBulkKeysCommand."""

    def __init__(self, key_manager: KeyLifecycleManager):
        """Initialize handler with the key lifecycle manager."""
        self.key_manager = key_manager

    async def handle(self, command: IssueBulkKeysCommand) -> IssuedKeysDTO:
        """
        Handle bulk issue command.

        Args:
            command: IssueBulkKeysCommand

        Returns:
            IssuedKeysDTO holding every new key

        Raises:
            ApplicationNotFoundError: If application not found
            KeyConflictError: If no collision-free batch could be stored
        """
        keys = await self.key_manager.issue_bulk(
            command.app_id, command.quantity, command.duration_days
        )
        keys_issued_total.inc(len(keys))
        return IssuedKeysDTO(keys=[KeyDTO.from_entity(key) for key in keys])
