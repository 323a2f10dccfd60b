"""
Django implementation of UserRepository port.

This adapter converts between domain entities and Django ORM models.
"""

from typing import Optional

from asgiref.sync import sync_to_async

from access.domain.user import User
from access.infrastructure.models import BotUser as BotUserModel
from access.ports.user_repository import UserRepository


class DjangoUserRepository(UserRepository):
    """Django ORM implementation of UserRepository."""

    def _to_domain(self, model: BotUserModel) -> User:
        """
        Convert Django model to domain entity.

        Args:
            model: Django BotUser model

        Returns:
            User domain entity
        """
        return User(discord_id=model.discord_id, is_bot_enabled=model.is_bot_enabled)

    @sync_to_async
    def find_by_discord_id(self, discord_id: str) -> Optional[User]:
        """
        Find a user by Discord ID.

        Args:
            discord_id: Caller identity

        Returns:
            User entity or None if not found
        """
        try:
            # pylint: disable=no-member
            model = BotUserModel.objects.get(discord_id=discord_id)
            return self._to_domain(model)
        except BotUserModel.DoesNotExist:  # pylint: disable=no-member
            return None

    @sync_to_async
    def upsert(self, user: User) -> User:
        """
        Create or update a user keyed on Discord ID.

        ``update_or_create`` locks the row and falls back to a re-read on a
        concurrent insert, so the unique constraint keeps one row per caller.

        Args:
            user: User entity carrying the desired state

        Returns:
            Stored user entity
        """
        # pylint: disable=no-member
        model, _ = BotUserModel.objects.update_or_create(
            discord_id=user.discord_id,
            defaults={"is_bot_enabled": user.is_bot_enabled},
        )
        return self._to_domain(model)
