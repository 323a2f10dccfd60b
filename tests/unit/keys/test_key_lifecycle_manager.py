"""
Unit tests for KeyLifecycleManager.
"""

from datetime import timedelta

import pytest

from conftest import FIXED_NOW, sequential_tokens
from core.domain.exceptions import (
    ApplicationNotFoundError,
    InvalidKeyStatusError,
    KeyConflictError,
    KeyNotFoundError,
)
from core.domain.value_objects import KeyStatus
from keys.domain.key import Key
from keys.domain.services import KeyLifecycleManager


def _stored_key(token, app_id="app1", expires_in_days=None, status=KeyStatus.UNUSED):
    created_at = FIXED_NOW - timedelta(days=30)
    expires_at = None
    if expires_in_days is not None:
        expires_at = FIXED_NOW + timedelta(days=expires_in_days)
    return Key(
        key=token,
        app_id=app_id,
        status=status,
        created_at=created_at,
        expires_at=expires_at,
    )


class TestIssue:
    """Tests for single key issuance."""

    @pytest.mark.asyncio
    async def test_issue_with_duration(self, key_manager, memory_key_repository):
        """Test issuing a key that expires after seven days."""
        key = await key_manager.issue("app1", 7)

        assert key.status == KeyStatus.UNUSED
        assert key.created_at == FIXED_NOW
        assert key.expires_at == FIXED_NOW + timedelta(days=7)
        assert memory_key_repository.keys[key.key] == key

    @pytest.mark.asyncio
    @pytest.mark.parametrize("duration", [None, 0])
    async def test_issue_without_expiry(self, key_manager, duration):
        """Test missing or zero duration issues a non-expiring key."""
        key = await key_manager.issue("app1", duration)
        assert key.expires_at is None

    @pytest.mark.asyncio
    async def test_issue_unknown_application(self, key_manager, memory_key_repository):
        """Test issuing for an unregistered application stores nothing."""
        with pytest.raises(ApplicationNotFoundError):
            await key_manager.issue("missing")

        assert memory_key_repository.keys == {}

    @pytest.mark.asyncio
    async def test_issue_retries_on_collision(
        self, memory_key_repository, memory_application_repository, fixed_clock
    ):
        """Test a token collision is retried with a fresh token."""
        await memory_key_repository.add(_stored_key("TAKEN00000000000"))
        manager = KeyLifecycleManager(
            key_repository=memory_key_repository,
            application_repository=memory_application_repository,
            token_factory=sequential_tokens("TAKEN00000000000", "FRESH00000000000"),
            clock=fixed_clock,
        )

        key = await manager.issue("app1")

        assert key.key == "FRESH00000000000"
        assert memory_key_repository.add_calls == 3

    @pytest.mark.asyncio
    async def test_issue_gives_up_after_max_attempts(
        self, memory_key_repository, memory_application_repository, fixed_clock
    ):
        """Test persistent collisions end in a conflict."""
        await memory_key_repository.add(_stored_key("TAKEN00000000000"))
        manager = KeyLifecycleManager(
            key_repository=memory_key_repository,
            application_repository=memory_application_repository,
            max_token_attempts=3,
            token_factory=lambda: "TAKEN00000000000",
            clock=fixed_clock,
        )

        with pytest.raises(KeyConflictError):
            await manager.issue("app1")

        assert memory_key_repository.add_calls == 4
        assert len(memory_key_repository.keys) == 1

    def test_max_attempts_must_be_positive(
        self, memory_key_repository, memory_application_repository
    ):
        """Test manager validation."""
        with pytest.raises(ValueError):
            KeyLifecycleManager(
                key_repository=memory_key_repository,
                application_repository=memory_application_repository,
                max_token_attempts=0,
            )


class TestIssueBulk:
    """Tests for bulk key issuance."""

    @pytest.mark.asyncio
    async def test_issue_bulk(self, key_manager, memory_key_repository):
        """Test a batch shares one expiry and has distinct tokens."""
        keys = await key_manager.issue_bulk("app1", 5, 30)

        assert len(keys) == 5
        assert len({key.key for key in keys}) == 5
        assert {key.expires_at for key in keys} == {FIXED_NOW + timedelta(days=30)}
        assert len(memory_key_repository.keys) == 5
        assert memory_key_repository.add_many_calls == 1

    @pytest.mark.asyncio
    async def test_issue_bulk_skips_repeated_tokens_within_batch(
        self, memory_key_repository, memory_application_repository, fixed_clock
    ):
        """Test a repeated draw inside one batch is replaced."""
        manager = KeyLifecycleManager(
            key_repository=memory_key_repository,
            application_repository=memory_application_repository,
            token_factory=sequential_tokens("SAME000000000000", "SAME000000000000"),
            clock=fixed_clock,
        )

        keys = await manager.issue_bulk("app1", 2)

        assert [key.key for key in keys] == ["SAME000000000000", "0000000000000000"]

    @pytest.mark.asyncio
    async def test_issue_bulk_is_all_or_nothing(
        self, memory_key_repository, memory_application_repository, fixed_clock
    ):
        """Test a batch colliding with a stored key is retried as a whole."""
        await memory_key_repository.add(_stored_key("TAKEN00000000000"))
        manager = KeyLifecycleManager(
            key_repository=memory_key_repository,
            application_repository=memory_application_repository,
            token_factory=sequential_tokens("TAKEN00000000000", "A000000000000001"),
            clock=fixed_clock,
        )

        keys = await manager.issue_bulk("app1", 2)

        assert "TAKEN00000000000" not in [key.key for key in keys]
        assert memory_key_repository.add_many_calls == 2
        assert await memory_key_repository.count("app1") == 3

    @pytest.mark.asyncio
    async def test_issue_bulk_conflict_stores_nothing(
        self, memory_key_repository, memory_application_repository, fixed_clock
    ):
        """Test exhausted retries leave the store unchanged."""
        await memory_key_repository.add(_stored_key("TAKEN00000000000"))
        draws = iter(["TAKEN00000000000", "B000000000000001"] * 10)
        manager = KeyLifecycleManager(
            key_repository=memory_key_repository,
            application_repository=memory_application_repository,
            max_token_attempts=2,
            token_factory=lambda: next(draws),
            clock=fixed_clock,
        )

        with pytest.raises(KeyConflictError):
            await manager.issue_bulk("app1", 2)

        assert list(memory_key_repository.keys) == ["TAKEN00000000000"]

    @pytest.mark.asyncio
    async def test_issue_bulk_unknown_application(self, key_manager):
        """Test bulk issuance for an unregistered application."""
        with pytest.raises(ApplicationNotFoundError):
            await key_manager.issue_bulk("missing", 3)

    @pytest.mark.asyncio
    async def test_issue_bulk_rejects_zero_quantity(self, key_manager):
        """Test quantity validation."""
        with pytest.raises(ValueError):
            await key_manager.issue_bulk("app1", 0)


class TestQueriesAndDeletion:
    """Tests for check, delete, list and stats."""

    @pytest.mark.asyncio
    async def test_check(self, key_manager):
        """Test looking up an issued key."""
        issued = await key_manager.issue("app1", 7)

        found = await key_manager.check(issued.key)

        assert found == issued

    @pytest.mark.asyncio
    async def test_check_missing(self, key_manager):
        """Test looking up an unknown key."""
        with pytest.raises(KeyNotFoundError):
            await key_manager.check("NOPE000000000000")

    @pytest.mark.asyncio
    async def test_delete_one(self, key_manager):
        """Test deleting a key, then deleting it again."""
        issued = await key_manager.issue("app1")

        assert await key_manager.delete_one(issued.key) == 1
        with pytest.raises(KeyNotFoundError):
            await key_manager.delete_one(issued.key)

    @pytest.mark.asyncio
    async def test_delete_expired_is_idempotent(self, key_manager, memory_key_repository):
        """Test only past-expiry keys of the application are deleted."""
        await memory_key_repository.add(_stored_key("OLD0000000000001", expires_in_days=-2))
        await memory_key_repository.add(_stored_key("OLD0000000000002", expires_in_days=-1))
        await memory_key_repository.add(_stored_key("NEW0000000000001", expires_in_days=5))
        await memory_key_repository.add(_stored_key("FOREVER000000001"))
        await memory_key_repository.add(
            _stored_key("OTHERAPP00000001", app_id="app2", expires_in_days=-1)
        )

        assert await key_manager.delete_expired("app1") == 2
        assert await key_manager.delete_expired("app1") == 0
        assert set(memory_key_repository.keys) == {
            "NEW0000000000001",
            "FOREVER000000001",
            "OTHERAPP00000001",
        }

    @pytest.mark.asyncio
    async def test_list_all(self, key_manager):
        """Test listing keys of one application."""
        await key_manager.issue_bulk("app1", 3)
        await key_manager.issue("app2")

        keys = await key_manager.list_all("app1")

        assert len(keys) == 3
        assert {key.app_id for key in keys} == {"app1"}

    @pytest.mark.asyncio
    async def test_stats(self, key_manager):
        """Test counts before and after more keys are issued and used."""
        first = await key_manager.issue_bulk("app1", 3)
        await key_manager.mark_used(first[0].key, "1001")

        stats = await key_manager.stats("app1")
        assert (stats.total, stats.unused, stats.used) == (3, 2, 1)

        more = await key_manager.issue_bulk("app1", 3)
        await key_manager.mark_used(more[0].key, "1001")

        stats = await key_manager.stats("app1")
        assert (stats.total, stats.unused, stats.used) == (6, 4, 2)

    @pytest.mark.asyncio
    async def test_stats_without_keys(self, key_manager):
        """Test stats of an application with no keys."""
        stats = await key_manager.stats("app2")
        assert (stats.total, stats.unused, stats.used) == (0, 0, 0)


class TestMarkUsed:
    """Tests for redeeming keys."""

    @pytest.mark.asyncio
    async def test_mark_used(self, key_manager, memory_key_repository):
        """Test marking a key used records the redeemer."""
        issued = await key_manager.issue("app1")

        used = await key_manager.mark_used(issued.key, "1001")

        assert used.status == KeyStatus.USED
        assert memory_key_repository.keys[issued.key].user_discord_id == "1001"

    @pytest.mark.asyncio
    async def test_mark_used_twice(self, key_manager):
        """Test a used key cannot be redeemed again."""
        issued = await key_manager.issue("app1")
        await key_manager.mark_used(issued.key, "1001")

        with pytest.raises(InvalidKeyStatusError):
            await key_manager.mark_used(issued.key, "2002")

    @pytest.mark.asyncio
    async def test_mark_used_missing(self, key_manager):
        """Test redeeming an unknown key."""
        with pytest.raises(KeyNotFoundError):
            await key_manager.mark_used("NOPE000000000000")


class TestStatsByStatus:
    """Tests for stats over stored statuses."""

    @pytest.mark.asyncio
    async def test_expired_status_counts_only_in_total(self, key_manager, memory_key_repository):
        """Test keys stored as expired are not broken out."""
        statuses = [KeyStatus.UNUSED] * 3 + [KeyStatus.USED] * 2 + [KeyStatus.EXPIRED]
        for i, status in enumerate(statuses):
            await memory_key_repository.add(_stored_key(f"S{i:015d}", status=status))

        stats = await key_manager.stats("app1")

        assert (stats.total, stats.unused, stats.used) == (6, 3, 2)
