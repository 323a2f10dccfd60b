"""
SetBotAccessHandler.

Handles the enable/disable commands.
"""

from access.application.commands.set_bot_access import SetBotAccessCommand
from access.domain.services import AccessControlGate
from access.domain.user import User


class SetBotAccessHandler:
    """Handler for SetBotAccessCommand."""

    def __init__(self, access_gate: AccessControlGate):
        """Initialize handler with the access control gate."""
        self.access_gate = access_gate

    async def handle(self, command: SetBotAccessCommand) -> User:
        """
        Handle set bot access command.

        Args:
            command: SetBotAccessCommand

        Returns:
            Stored User entity
        """
        return await self.access_gate.set_enabled(command.target_id, command.enabled)
