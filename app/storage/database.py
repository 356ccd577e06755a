"""SQLAlchemy-backed storage."""

from datetime import datetime
from typing import Any, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import BoostSettings, Drop, QueueEntry
from app.storage.base import QueueStorage
from core.db import utcnow
from core.exceptions import DuplicateEmailException
from core.logging import get_logger

logger = get_logger(__name__)


class DatabaseStorage(QueueStorage):
    """Storage over one request-scoped ``AsyncSession``."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def get_entry(self, entry_id: str) -> Optional[QueueEntry]:
        return await QueueEntry.get_by_id(self.db_session, entry_id)

    async def get_entry_by_email(self, email: str) -> Optional[QueueEntry]:
        return await QueueEntry.get_by_email(self.db_session, email)

    async def create_entry(
        self,
        email: str,
        position: int,
        phone: Optional[str] = None,
        notifications: bool = False,
    ) -> QueueEntry:
        if await QueueEntry.get_by_email(self.db_session, email):
            raise DuplicateEmailException()

        entry = QueueEntry(
            email=email,
            phone=phone,
            notifications=notifications,
            position=position,
        )
        self.db_session.add(entry)
        try:
            await self.db_session.commit()
        except IntegrityError:
            # A concurrent signup won the race past the lookup above
            await self.db_session.rollback()
            logger.warning("Unique constraint rejected duplicate queue email")
            raise DuplicateEmailException()
        await self.db_session.refresh(entry)
        return entry

    async def list_entries(self) -> Sequence[QueueEntry]:
        return await QueueEntry.get_all(self.db_session)

    async def count_entries(self) -> int:
        return await QueueEntry.count(self.db_session)

    async def delete_entry(self, entry_id: str) -> bool:
        return await QueueEntry.delete_by_id(self.db_session, entry_id)

    async def update_entry_boost(
        self, entry_id: str, instagram_username: str, position: int
    ) -> Optional[QueueEntry]:
        entry = await QueueEntry.get_by_id(self.db_session, entry_id)
        if not entry:
            return None
        return await entry.apply_boost(self.db_session, instagram_username, position)

    async def create_drop(
        self,
        name: str,
        drop_time: datetime,
        description: Optional[str] = None,
        is_active: bool = True,
        max_queue_size: int = 300,
    ) -> Drop:
        drop = Drop(
            name=name,
            description=description,
            drop_time=drop_time,
            is_active=is_active,
            max_queue_size=max_queue_size,
        )
        self.db_session.add(drop)
        await self.db_session.commit()
        await self.db_session.refresh(drop)
        return drop

    async def list_drops(self) -> Sequence[Drop]:
        return await Drop.get_all(self.db_session)

    async def get_active_drop(self) -> Optional[Drop]:
        return await Drop.get_active(self.db_session)

    async def update_drop(self, drop_id: str, **updates: Any) -> Optional[Drop]:
        drop = await Drop.get_by_id(self.db_session, drop_id)
        if not drop:
            return None
        return await drop.update(self.db_session, **updates)

    async def delete_drop(self, drop_id: str) -> bool:
        drop = await Drop.get_by_id(self.db_session, drop_id)
        if not drop:
            return False
        await self.db_session.delete(drop)
        await self.db_session.commit()
        return True

    async def get_settings(self) -> Optional[BoostSettings]:
        return await BoostSettings.get_current(self.db_session)

    async def upsert_settings(
        self, instagram_post_url: Optional[str], instagram_boost_enabled: bool
    ) -> BoostSettings:
        settings = await BoostSettings.get_current(self.db_session)
        if settings:
            settings.instagram_post_url = instagram_post_url
            settings.instagram_boost_enabled = instagram_boost_enabled
            settings.updated_at = utcnow()
        else:
            settings = BoostSettings(
                instagram_post_url=instagram_post_url,
                instagram_boost_enabled=instagram_boost_enabled,
            )
            self.db_session.add(settings)
        await self.db_session.commit()
        await self.db_session.refresh(settings)
        return settings
