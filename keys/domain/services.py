"""
Key domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from applications.ports.application_repository import ApplicationRepository
from core.domain.exceptions import (
    ApplicationNotFoundError,
    DuplicateKeyError,
    KeyConflictError,
    KeyNotFoundError,
)
from core.domain.value_objects import Duration, KeyStatus
from keys.domain.key import Key, KeyStats, generate_key_token
from keys.ports.key_repository import KeyRepository

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKEN_ATTEMPTS = 5


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class KeyLifecycleManager:
    """
    Domain service for issuing, querying and revoking keys.

    Token uniqueness is enforced by the store's unique constraint. A
    collision on insert is retried with fresh tokens up to
    ``max_token_attempts`` times before giving up with KeyConflictError.
    """

    def __init__(
        self,
        key_repository: KeyRepository,
        application_repository: ApplicationRepository,
        max_token_attempts: int = DEFAULT_MAX_TOKEN_ATTEMPTS,
        token_factory: Callable[[], str] = generate_key_token,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize manager.

        Args:
            key_repository: Key persistence port
            application_repository: Application persistence port
            max_token_attempts: Insert attempts before reporting a conflict
            token_factory: Source of new key tokens
            clock: Source of the current time
        """
        if max_token_attempts < 1:
            raise ValueError("max_token_attempts must be at least 1")
        self.key_repository = key_repository
        self.application_repository = application_repository
        self.max_token_attempts = max_token_attempts
        self.token_factory = token_factory
        self.clock = clock

    async def _require_application(self, app_id: str) -> None:
        if not await self.application_repository.exists(app_id):
            raise ApplicationNotFoundError()

    async def issue(self, app_id: str, duration_days: Optional[int] = None) -> Key:
        """
        Issue one key for an application.

        Args:
            app_id: Application ID
            duration_days: Validity in whole days, or None/0 for no expiry

        Returns:
            Stored Key entity

        Raises:
            ApplicationNotFoundError: If the application does not exist
            KeyConflictError: If no unique token could be stored
        """
        await self._require_application(app_id)
        duration = Duration.from_days(duration_days)
        issued_at = self.clock()

        for attempt in range(1, self.max_token_attempts + 1):
            key = Key.create(
                app_id=app_id,
                duration=duration,
                issued_at=issued_at,
                token=self.token_factory(),
            )
            try:
                saved = await self.key_repository.add(key)
            except DuplicateKeyError:
                logger.warning(
                    "Key token collision for app %s (attempt %d/%d)",
                    app_id,
                    attempt,
                    self.max_token_attempts,
                )
                continue
            logger.info("Issued key for app %s (expires_at=%s)", app_id, saved.expires_at)
            return saved

        raise KeyConflictError()

    async def issue_bulk(
        self, app_id: str, quantity: int, duration_days: Optional[int] = None
    ) -> List[Key]:
        """
        Issue a batch of keys sharing one expiry, stored all-or-nothing.

        Args:
            app_id: Application ID
            quantity: Number of keys to issue
            duration_days: Validity in whole days, or None/0 for no expiry

        Returns:
            Stored Key entities

        Raises:
            ApplicationNotFoundError: If the application does not exist
            KeyConflictError: If no collision-free batch could be stored
        """
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")
        await self._require_application(app_id)
        duration = Duration.from_days(duration_days)
        issued_at = self.clock()

        for attempt in range(1, self.max_token_attempts + 1):
            tokens = self._distinct_tokens(quantity)
            batch = [
                Key.create(app_id=app_id, duration=duration, issued_at=issued_at, token=token)
                for token in tokens
            ]
            try:
                saved = await self.key_repository.add_many(batch)
            except DuplicateKeyError:
                logger.warning(
                    "Key token collision in batch of %d for app %s (attempt %d/%d)",
                    quantity,
                    app_id,
                    attempt,
                    self.max_token_attempts,
                )
                continue
            logger.info("Issued %d keys for app %s", len(saved), app_id)
            return saved

        raise KeyConflictError()

    def _distinct_tokens(self, quantity: int) -> List[str]:
        tokens: List[str] = []
        seen = set()
        draws = 0
        while len(tokens) < quantity:
            draws += 1
            if draws > quantity * self.max_token_attempts:
                raise KeyConflictError()
            token = self.token_factory()
            if token not in seen:
                seen.add(token)
                tokens.append(token)
        return tokens

    async def check(self, key: str) -> Key:
        """
        Look up a key without changing it.

        Args:
            key: Key token

        Returns:
            Key entity

        Raises:
            KeyNotFoundError: If the key does not exist
        """
        found = await self.key_repository.find_by_key(key)
        if found is None:
            raise KeyNotFoundError()
        return found

    async def delete_one(self, key: str) -> int:
        """
        Delete a single key.

        Args:
            key: Key token

        Returns:
            Number of deleted keys

        Raises:
            KeyNotFoundError: If nothing was deleted
        """
        deleted = await self.key_repository.delete_by_key(key)
        if deleted == 0:
            raise KeyNotFoundError()
        logger.info("Deleted key %s", key)
        return deleted

    async def delete_expired(self, app_id: str) -> int:
        """
        Delete every key of an application whose expiry has passed.

        Args:
            app_id: Application ID

        Returns:
            Number of deleted keys (zero is not an error)
        """
        deleted = await self.key_repository.delete_expired(app_id, self.clock())
        logger.info("Deleted %d expired keys for app %s", deleted, app_id)
        return deleted

    async def list_all(self, app_id: str) -> List[Key]:
        """
        List every key of an application, any status.

        Args:
            app_id: Application ID

        Returns:
            List of Key entities
        """
        return await self.key_repository.find_by_app(app_id)

    async def stats(self, app_id: str) -> KeyStats:
        """
        Count keys of an application.

        Args:
            app_id: Application ID

        Returns:
            KeyStats with total, unused and used counts
        """
        return KeyStats(
            total=await self.key_repository.count(app_id),
            unused=await self.key_repository.count(app_id, KeyStatus.UNUSED),
            used=await self.key_repository.count(app_id, KeyStatus.USED),
        )

    async def mark_used(self, key: str, user_discord_id: Optional[str] = None) -> Key:
        """
        Mark an unused key as used.

        Args:
            key: Key token
            user_discord_id: Identity of the redeeming caller

        Returns:
            Updated Key entity

        Raises:
            KeyNotFoundError: If the key does not exist
            InvalidKeyStatusError: If the key is not unused
        """
        found = await self.check(key)
        used = found.mark_used(user_discord_id)
        saved = await self.key_repository.update_status(used, previous_status=found.status)
        logger.info("Marked key %s as used", key)
        return saved
