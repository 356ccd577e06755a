"""Tests for the storage contract, run against both backends."""

from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import QueueEntry
from app.storage import DatabaseStorage
from core.db import as_utc, utcnow
from core.exceptions import DuplicateEmailException


class TestEntryStore:
    """Tests for queue entry persistence."""

    async def test_create_and_lookup(self, storage):
        entry = await storage.create_entry(
            email="a@x.com", position=284, phone="555-0100", notifications=True
        )

        assert entry.id
        assert entry.instagram_boost_used is False
        assert entry.joined_at is not None
        assert (await storage.get_entry(entry.id)).email == "a@x.com"
        assert (await storage.get_entry_by_email("a@x.com")).phone == "555-0100"
        assert await storage.get_entry_by_email("b@x.com") is None
        assert await storage.get_entry("missing") is None

    async def test_duplicate_email_raises(self, storage):
        await storage.create_entry(email="a@x.com", position=284)

        with pytest.raises(DuplicateEmailException):
            await storage.create_entry(email="a@x.com", position=285, phone="1")

        assert await storage.count_entries() == 1

    async def test_list_ordered_by_position(self, storage):
        await storage.create_entry(email="c@x.com", position=300)
        await storage.create_entry(email="a@x.com", position=5)
        await storage.create_entry(email="b@x.com", position=120)

        entries = await storage.list_entries()

        assert [e.position for e in entries] == [5, 120, 300]

    async def test_delete(self, storage):
        entry = await storage.create_entry(email="a@x.com", position=284)

        assert await storage.delete_entry(entry.id) is True
        assert await storage.delete_entry(entry.id) is False
        assert await storage.count_entries() == 0
        # Email is free again after deletion
        await storage.create_entry(email="a@x.com", position=284)

    async def test_update_entry_boost(self, storage):
        entry = await storage.create_entry(email="a@x.com", position=284)

        updated = await storage.update_entry_boost(entry.id, "handle", 184)

        assert updated.position == 184
        assert updated.instagram_boost_used is True
        assert updated.instagram_username == "handle"
        assert await storage.update_entry_boost("missing", "x", 1) is None


class TestUniqueConstraint:
    async def test_integrity_error_maps_to_duplicate_email(
        self, db_session: AsyncSession, monkeypatch
    ):
        """The constraint path reports the same error as the lookup path."""
        storage = DatabaseStorage(db_session)
        await storage.create_entry(email="a@x.com", position=284)

        async def no_match(cls, db_session, email):
            return None

        monkeypatch.setattr(QueueEntry, "get_by_email", classmethod(no_match))

        with pytest.raises(DuplicateEmailException):
            await storage.create_entry(email="a@x.com", position=285)


class TestDropStore:
    """Tests for drop persistence."""

    async def test_list_newest_first(self, storage, create_drop):
        first = await create_drop(name="First")
        second = await create_drop(name="Second")

        drops = await storage.list_drops()

        assert [d.id for d in drops] == [second.id, first.id]

    async def test_active_drop_tie_break_is_most_recent(self, storage, create_drop):
        await create_drop(name="Older active")
        newer = await create_drop(name="Newer active")
        await create_drop(name="Inactive", is_active=False)

        active = await storage.get_active_drop()

        assert active.id == newer.id

    async def test_no_active_drop(self, storage, create_drop):
        await create_drop(is_active=False)
        assert await storage.get_active_drop() is None

    async def test_partial_update(self, storage, create_drop):
        drop = await create_drop(name="Original")
        new_time = utcnow() + timedelta(days=1)

        updated = await storage.update_drop(drop.id, drop_time=new_time)

        assert updated.name == "Original"
        assert as_utc(updated.drop_time) == new_time
        assert await storage.update_drop("missing", name="x") is None

    async def test_delete(self, storage, create_drop):
        drop = await create_drop()

        assert await storage.delete_drop(drop.id) is True
        assert await storage.delete_drop(drop.id) is False
        assert await storage.list_drops() == []


class TestSettingsStore:
    """Tests for single-row settings upsert."""

    async def test_get_before_first_save(self, storage):
        assert await storage.get_settings() is None

    async def test_upsert_keeps_single_row(self, storage):
        created = await storage.upsert_settings("https://instagram.com/p/abc", True)
        first_id = created.id
        first_updated_at = created.updated_at

        updated = await storage.upsert_settings(None, False)

        assert updated.id == first_id
        assert updated.instagram_post_url is None
        assert updated.instagram_boost_enabled is False
        assert updated.updated_at >= first_updated_at
        assert (await storage.get_settings()).id == first_id
