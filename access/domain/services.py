"""
Access domain services.

The access control gate decides whether a requester may invoke the
key service at all. It is consulted by the command dispatcher before
any gated command runs.
"""

import logging
from typing import Optional

from access.domain.user import User
from access.ports.user_repository import UserRepository
from core.domain.value_objects import Entitlement

logger = logging.getLogger(__name__)


class AccessControlGate:
    """Domain service resolving and changing requester entitlements."""

    def __init__(self, user_repository: UserRepository):
        """Initialize gate with the user repository."""
        self.user_repository = user_repository

    async def resolve_entitlement(self, requester_id: Optional[str]) -> Entitlement:
        """
        Resolve the entitlement of a requester.

        A requester without an identity or without a stored user is
        UNKNOWN, which is never authorized.

        Args:
            requester_id: Caller identity (may be missing)

        Returns:
            Entitlement of the requester
        """
        if not requester_id or not isinstance(requester_id, str):
            return Entitlement.UNKNOWN

        user = await self.user_repository.find_by_discord_id(requester_id)
        if user is None:
            return Entitlement.UNKNOWN
        return user.entitlement

    async def is_authorized(self, requester_id: Optional[str]) -> bool:
        """
        Check whether a requester may use gated commands.

        Args:
            requester_id: Caller identity

        Returns:
            True only for a stored, enabled user
        """
        entitlement = await self.resolve_entitlement(requester_id)
        return entitlement.is_authorized

    async def set_enabled(self, target_id: str, enabled: bool) -> User:
        """
        Enable or disable a caller, creating the user on first use.

        Args:
            target_id: Caller identity to change
            enabled: Desired value of the flag

        Returns:
            Stored User entity
        """
        user = User(discord_id=target_id).with_bot_enabled(enabled)
        saved = await self.user_repository.upsert(user)
        logger.info("Set bot access for %s to %s", target_id, enabled)
        return saved
