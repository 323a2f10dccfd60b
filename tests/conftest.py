"""
Pytest configuration and shared fixtures.
"""

import itertools
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest
from asgiref.sync import async_to_sync

from access.domain.services import AccessControlGate
from access.domain.user import User
from access.infrastructure.repositories.django_user_repository import DjangoUserRepository
from access.ports.user_repository import UserRepository
from applications.domain.application import Application
from applications.infrastructure.repositories.django_application_repository import (
    DjangoApplicationRepository,
)
from applications.ports.application_repository import ApplicationRepository
from core.domain.exceptions import DuplicateKeyError, InvalidKeyStatusError, KeyNotFoundError
from core.domain.value_objects import KeyStatus
from keys.domain.key import Key
from keys.domain.services import KeyLifecycleManager
from keys.infrastructure.repositories.django_key_repository import DjangoKeyRepository
from keys.ports.key_repository import KeyRepository

FIXED_NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class InMemoryKeyRepository(KeyRepository):
    """KeyRepository keeping keys in a dict, with the same unique-token rule."""

    def __init__(self):
        self.keys: Dict[str, Key] = {}
        self.add_calls = 0
        self.add_many_calls = 0

    async def add(self, key: Key) -> Key:
        self.add_calls += 1
        if key.key in self.keys:
            raise DuplicateKeyError()
        self.keys[key.key] = key
        return key

    async def add_many(self, keys: List[Key]) -> List[Key]:
        self.add_many_calls += 1
        if any(key.key in self.keys for key in keys):
            raise DuplicateKeyError()
        for key in keys:
            self.keys[key.key] = key
        return list(keys)

    async def update_status(self, key: Key, previous_status: KeyStatus) -> Key:
        stored = self.keys.get(key.key)
        if stored is None:
            raise KeyNotFoundError()
        if stored.status is not previous_status:
            raise InvalidKeyStatusError()
        self.keys[key.key] = key
        return key

    async def find_by_key(self, key: str) -> Optional[Key]:
        return self.keys.get(key)

    async def find_by_app(self, app_id: str) -> List[Key]:
        return [key for key in self.keys.values() if key.app_id == app_id]

    async def count(self, app_id: str, status: Optional[KeyStatus] = None) -> int:
        return len(
            [
                key
                for key in self.keys.values()
                if key.app_id == app_id and (status is None or key.status is status)
            ]
        )

    async def delete_by_key(self, key: str) -> int:
        return 1 if self.keys.pop(key, None) is not None else 0

    async def delete_expired(self, app_id: str, now: datetime) -> int:
        expired = [
            token
            for token, key in self.keys.items()
            if key.app_id == app_id and key.expires_at is not None and key.expires_at < now
        ]
        for token in expired:
            del self.keys[token]
        return len(expired)


class InMemoryApplicationRepository(ApplicationRepository):
    """ApplicationRepository keeping applications in a dict."""

    def __init__(self, *app_ids: str):
        self.applications: Dict[str, Application] = {
            app_id: Application.create(app_id=app_id, owner_id="owner", name=app_id)
            for app_id in app_ids
        }

    async def save(self, application: Application) -> Application:
        self.applications[application.app_id] = application
        return application

    async def find_by_app_id(self, app_id: str) -> Optional[Application]:
        return self.applications.get(app_id)

    async def exists(self, app_id: str) -> bool:
        return app_id in self.applications


class InMemoryUserRepository(UserRepository):
    """UserRepository keeping users in a dict."""

    def __init__(self):
        self.users: Dict[str, User] = {}

    async def find_by_discord_id(self, discord_id: str) -> Optional[User]:
        return self.users.get(discord_id)

    async def upsert(self, user: User) -> User:
        self.users[user.discord_id] = user
        return user


def sequential_tokens(*tokens: str):
    """Token factory replaying ``tokens``, then counting upwards."""
    counter = itertools.count()
    replay = iter(tokens)

    def factory() -> str:
        try:
            return next(replay)
        except StopIteration:
            return f"{next(counter):016X}"

    return factory


@pytest.fixture
def fixed_clock():
    """Clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def memory_key_repository():
    """Fixture for an in-memory KeyRepository."""
    return InMemoryKeyRepository()


@pytest.fixture
def memory_application_repository():
    """Fixture for an in-memory ApplicationRepository holding app1 and app2."""
    return InMemoryApplicationRepository("app1", "app2")


@pytest.fixture
def memory_user_repository():
    """Fixture for an in-memory UserRepository."""
    return InMemoryUserRepository()


@pytest.fixture
def key_manager(memory_key_repository, memory_application_repository, fixed_clock):
    """KeyLifecycleManager over in-memory repositories."""
    return KeyLifecycleManager(
        key_repository=memory_key_repository,
        application_repository=memory_application_repository,
        clock=fixed_clock,
    )


@pytest.fixture
def access_gate(memory_user_repository):
    """AccessControlGate over an in-memory repository."""
    return AccessControlGate(memory_user_repository)


@pytest.fixture
def key_repository():
    """Fixture for KeyRepository."""
    return DjangoKeyRepository()


@pytest.fixture
def application_repository():
    """Fixture for ApplicationRepository."""
    return DjangoApplicationRepository()


@pytest.fixture
def user_repository():
    """Fixture for UserRepository."""
    return DjangoUserRepository()


@pytest.fixture
def db_application(db, application_repository):
    """Fixture for an Application saved in database."""
    application = Application.create(app_id="app1", owner_id="owner-1", name="App One")
    return async_to_sync(application_repository.save)(application)


@pytest.fixture
def enabled_user(db, user_repository):
    """Fixture for an enabled bot user saved in database."""
    return async_to_sync(user_repository.upsert)(User(discord_id="1001", is_bot_enabled=True))


@pytest.fixture
def disabled_user(db, user_repository):
    """Fixture for a disabled bot user saved in database."""
    return async_to_sync(user_repository.upsert)(User(discord_id="2002", is_bot_enabled=False))


@pytest.fixture
def expired_key(db, db_application, key_repository):
    """Fixture for a key saved in database whose expiry has passed."""
    issued_at = datetime.now(timezone.utc) - timedelta(days=10)
    key = Key(
        key="EXPIRED000000001",
        app_id=db_application.app_id,
        status=KeyStatus.UNUSED,
        created_at=issued_at,
        expires_at=issued_at + timedelta(days=1),
    )
    return async_to_sync(key_repository.add)(key)


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient  # pylint: disable=import-outside-toplevel

    return APIClient()


@pytest.fixture
def send_command(api_client):
    """Post a command envelope to the command endpoint."""

    def send(action, payload=None):
        body = {"action": action}
        if payload is not None:
            body["payload"] = payload
        return api_client.post("/api", body, format="json")

    return send
