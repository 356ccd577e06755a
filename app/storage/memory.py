"""In-process storage for demos and local runs without a database."""

from datetime import datetime
from functools import lru_cache
from typing import Any, Dict, List, Optional, Sequence
from uuid import uuid4

from app.models import BoostSettings, Drop, QueueEntry
from app.storage.base import QueueStorage
from core.db import utcnow
from core.exceptions import DuplicateEmailException


class MemoryStorage(QueueStorage):
    """Dict-backed storage with the same contract as ``DatabaseStorage``.

    Model instances are created detached from any session. Every method
    completes without awaiting, so each call is atomic on the event loop.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, QueueEntry] = {}
        self._email_to_id: Dict[str, str] = {}
        self._drops: List[Drop] = []
        self._settings: Optional[BoostSettings] = None

    async def get_entry(self, entry_id: str) -> Optional[QueueEntry]:
        return self._entries.get(entry_id)

    async def get_entry_by_email(self, email: str) -> Optional[QueueEntry]:
        entry_id = self._email_to_id.get(email)
        return self._entries.get(entry_id) if entry_id else None

    async def create_entry(
        self,
        email: str,
        position: int,
        phone: Optional[str] = None,
        notifications: bool = False,
    ) -> QueueEntry:
        if email in self._email_to_id:
            raise DuplicateEmailException()

        entry = QueueEntry(
            id=str(uuid4()),
            email=email,
            phone=phone,
            notifications=notifications,
            position=position,
            instagram_username=None,
            instagram_boost_used=False,
            joined_at=utcnow(),
        )
        self._entries[entry.id] = entry
        self._email_to_id[email] = entry.id
        return entry

    async def list_entries(self) -> Sequence[QueueEntry]:
        return sorted(self._entries.values(), key=lambda e: (e.position, e.joined_at))

    async def count_entries(self) -> int:
        return len(self._entries)

    async def delete_entry(self, entry_id: str) -> bool:
        entry = self._entries.pop(entry_id, None)
        if entry is None:
            return False
        self._email_to_id.pop(entry.email, None)
        return True

    async def update_entry_boost(
        self, entry_id: str, instagram_username: str, position: int
    ) -> Optional[QueueEntry]:
        entry = self._entries.get(entry_id)
        if entry is None:
            return None
        entry.instagram_username = instagram_username
        entry.instagram_boost_used = True
        entry.position = position
        return entry

    async def create_drop(
        self,
        name: str,
        drop_time: datetime,
        description: Optional[str] = None,
        is_active: bool = True,
        max_queue_size: int = 300,
    ) -> Drop:
        drop = Drop(
            id=str(uuid4()),
            name=name,
            description=description,
            drop_time=drop_time,
            is_active=is_active,
            max_queue_size=max_queue_size,
            created_at=utcnow(),
        )
        self._drops.append(drop)
        return drop

    async def list_drops(self) -> Sequence[Drop]:
        # Later inserts win ties on created_at
        return sorted(reversed(self._drops), key=lambda d: d.created_at, reverse=True)

    async def get_active_drop(self) -> Optional[Drop]:
        for drop in await self.list_drops():
            if drop.is_active:
                return drop
        return None

    async def update_drop(self, drop_id: str, **updates: Any) -> Optional[Drop]:
        for drop in self._drops:
            if drop.id == drop_id:
                for key, value in updates.items():
                    if hasattr(drop, key):
                        setattr(drop, key, value)
                return drop
        return None

    async def delete_drop(self, drop_id: str) -> bool:
        for index, drop in enumerate(self._drops):
            if drop.id == drop_id:
                del self._drops[index]
                return True
        return False

    async def get_settings(self) -> Optional[BoostSettings]:
        return self._settings

    async def upsert_settings(
        self, instagram_post_url: Optional[str], instagram_boost_enabled: bool
    ) -> BoostSettings:
        now = utcnow()
        if self._settings is None:
            self._settings = BoostSettings(
                id=str(uuid4()),
                instagram_post_url=instagram_post_url,
                instagram_boost_enabled=instagram_boost_enabled,
                created_at=now,
                updated_at=now,
            )
        else:
            self._settings.instagram_post_url = instagram_post_url
            self._settings.instagram_boost_enabled = instagram_boost_enabled
            self._settings.updated_at = now
        return self._settings


@lru_cache(maxsize=1)
def get_memory_storage() -> MemoryStorage:
    """The process-wide instance used when STORAGE_BACKEND=memory."""
    return MemoryStorage()
