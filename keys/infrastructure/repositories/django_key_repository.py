"""
Django implementation of KeyRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from datetime import datetime
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from core.domain.exceptions import DuplicateKeyError, InvalidKeyStatusError, KeyNotFoundError
from core.domain.value_objects import KeyStatus
from keys.domain.key import Key
from keys.infrastructure.models import Key as KeyModel
from keys.ports.key_repository import KeyRepository


class DjangoKeyRepository(KeyRepository):
    """
    Django ORM implementation of KeyRepository.

    Inserts run inside their own atomic block (a savepoint when nested) so a
    unique-constraint violation rolls back cleanly and the caller can retry
    with a fresh token.
    """

    def _to_domain(self, model: KeyModel) -> Key:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Key model

        Returns:
            Key domain entity
        """
        return Key(
            key=model.key,
            app_id=model.app_id,
            status=KeyStatus(model.status),
            created_at=model.created_at,
            expires_at=model.expires_at,
            user_discord_id=model.user_discord_id,
        )

    def _to_model(self, key: Key) -> KeyModel:
        """
        Build an unsaved Django model from a domain entity.

        Args:
            key: Key domain entity

        Returns:
            Django Key model
        """
        return KeyModel(
            key=key.key,
            app_id=key.app_id,
            status=key.status.value,
            created_at=key.created_at,
            expires_at=key.expires_at,
            user_discord_id=key.user_discord_id,
        )

    @sync_to_async
    def add(self, key: Key) -> Key:
        """
        Insert a new key.

        Args:
            key: Key entity to insert

        Returns:
            Inserted key entity

        Raises:
            DuplicateKeyError: If the token already exists
        """
        model = self._to_model(key)
        try:
            with transaction.atomic():
                model.save(force_insert=True)
        except IntegrityError as e:
            raise DuplicateKeyError(f"Key token {key.key} already exists") from e
        return self._to_domain(model)

    @sync_to_async
    def add_many(self, keys: List[Key]) -> List[Key]:
        """
        Insert a batch of new keys in a single transaction.

        Args:
            keys: Key entities to insert

        Returns:
            Inserted key entities

        Raises:
            DuplicateKeyError: If any token already exists
        """
        models = [self._to_model(key) for key in keys]
        try:
            with transaction.atomic():
                # pylint: disable=no-member
                KeyModel.objects.bulk_create(models)
        except IntegrityError as e:
            raise DuplicateKeyError("Key batch contains an existing token") from e
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def update_status(self, key: Key, previous_status: KeyStatus) -> Key:
        """
        Persist the status and redeemer of an existing key.

        Args:
            key: Key entity carrying the new state
            previous_status: Status the stored key must currently have

        Returns:
            Updated key entity

        Raises:
            KeyNotFoundError: If the key no longer exists
            InvalidKeyStatusError: If the stored status changed meanwhile
        """
        # pylint: disable=no-member
        updated = KeyModel.objects.filter(key=key.key, status=previous_status.value).update(
            status=key.status.value,
            user_discord_id=key.user_discord_id,
        )
        if updated == 0:
            if KeyModel.objects.filter(key=key.key).exists():
                raise InvalidKeyStatusError(f"Key {key.key} is no longer {previous_status}")
            raise KeyNotFoundError()
        return key

    @sync_to_async
    def find_by_key(self, key: str) -> Optional[Key]:
        """
        Find a key by its token.

        Args:
            key: Key token

        Returns:
            Key entity or None if not found
        """
        try:
            # pylint: disable=no-member
            model = KeyModel.objects.get(key=key)
            return self._to_domain(model)
        except KeyModel.DoesNotExist:  # pylint: disable=no-member
            return None

    @sync_to_async
    def find_by_app(self, app_id: str) -> List[Key]:
        """
        List every key of an application.

        Args:
            app_id: Application ID

        Returns:
            List of Key entities
        """
        # pylint: disable=no-member
        models = KeyModel.objects.filter(app_id=app_id)
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def count(self, app_id: str, status: Optional[KeyStatus] = None) -> int:
        """
        Count keys of an application, optionally by status.

        Args:
            app_id: Application ID
            status: Status filter

        Returns:
            Number of matching keys
        """
        # pylint: disable=no-member
        qs = KeyModel.objects.filter(app_id=app_id)
        if status is not None:
            qs = qs.filter(status=status.value)
        return qs.count()

    @sync_to_async
    def delete_by_key(self, key: str) -> int:
        """
        Delete a key by its token.

        Args:
            key: Key token

        Returns:
            Number of deleted keys
        """
        # pylint: disable=no-member
        deleted, _ = KeyModel.objects.filter(key=key).delete()
        return deleted

    @sync_to_async
    def delete_expired(self, app_id: str, now: datetime) -> int:
        """
        Delete keys of an application that expired before ``now``.

        Args:
            app_id: Application ID
            now: Reference time

        Returns:
            Number of deleted keys
        """
        # pylint: disable=no-member
        deleted, _ = KeyModel.objects.filter(
            app_id=app_id,
            expires_at__isnull=False,
            expires_at__lt=now,
        ).delete()
        return deleted
