"""Storage contract shared by the database and in-memory backends."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional, Sequence

from app.models import BoostSettings, Drop, QueueEntry


class QueueStorage(ABC):
    """Entry, drop and settings stores behind one swappable interface.

    Implementations must raise ``DuplicateEmailException`` from
    ``create_entry`` when the email is already queued, however they detect it.
    """

    # Entries

    @abstractmethod
    async def get_entry(self, entry_id: str) -> Optional[QueueEntry]:
        ...

    @abstractmethod
    async def get_entry_by_email(self, email: str) -> Optional[QueueEntry]:
        ...

    @abstractmethod
    async def create_entry(
        self,
        email: str,
        position: int,
        phone: Optional[str] = None,
        notifications: bool = False,
    ) -> QueueEntry:
        ...

    @abstractmethod
    async def list_entries(self) -> Sequence[QueueEntry]:
        """All entries ordered by position ascending."""

    @abstractmethod
    async def count_entries(self) -> int:
        ...

    @abstractmethod
    async def delete_entry(self, entry_id: str) -> bool:
        ...

    @abstractmethod
    async def update_entry_boost(
        self, entry_id: str, instagram_username: str, position: int
    ) -> Optional[QueueEntry]:
        """Mark the boost used, store the handle and the new position."""

    # Drops

    @abstractmethod
    async def create_drop(
        self,
        name: str,
        drop_time: datetime,
        description: Optional[str] = None,
        is_active: bool = True,
        max_queue_size: int = 300,
    ) -> Drop:
        ...

    @abstractmethod
    async def list_drops(self) -> Sequence[Drop]:
        """All drops, most recently created first."""

    @abstractmethod
    async def get_active_drop(self) -> Optional[Drop]:
        """The most recently created drop flagged active, if any."""

    @abstractmethod
    async def update_drop(self, drop_id: str, **updates: Any) -> Optional[Drop]:
        ...

    @abstractmethod
    async def delete_drop(self, drop_id: str) -> bool:
        ...

    # Settings

    @abstractmethod
    async def get_settings(self) -> Optional[BoostSettings]:
        ...

    @abstractmethod
    async def upsert_settings(
        self, instagram_post_url: Optional[str], instagram_boost_enabled: bool
    ) -> BoostSettings:
        """Update the single settings row in place, creating it on first use."""
