"""Queue entry model."""

from datetime import datetime
from typing import Optional, Sequence
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Integer,
    String,
    delete,
    func,
    select,
)
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapped, mapped_column

from core.db import Base, utcnow


class QueueEntry(Base):
    """A reserved spot in the drop queue.

    ``position`` is a display rank, not a unique sequence: a boost moves one
    entry forward without renumbering anyone else, so two entries can share a
    position.
    """

    __tablename__ = "queue_entries"
    __table_args__ = (
        CheckConstraint("position >= 1", name="ck_queue_entries_position_positive"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    notifications: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    instagram_username: Mapped[Optional[str]] = mapped_column(
        String(64), nullable=True
    )
    instagram_boost_used: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )

    @classmethod
    async def get_by_id(
        cls, db_session: AsyncSession, id: str
    ) -> Optional["QueueEntry"]:
        """Get entry by ID."""
        result = await db_session.execute(select(cls).where(cls.id == id))
        return result.scalars().first()

    @classmethod
    async def get_by_email(
        cls, db_session: AsyncSession, email: str
    ) -> Optional["QueueEntry"]:
        """Get entry by (normalized) email."""
        result = await db_session.execute(select(cls).where(cls.email == email))
        return result.scalars().first()

    @classmethod
    async def get_all(cls, db_session: AsyncSession) -> Sequence["QueueEntry"]:
        """Get all entries, front of the queue first."""
        result = await db_session.execute(
            select(cls).order_by(cls.position, cls.joined_at)
        )
        return result.scalars().all()

    @classmethod
    async def count(cls, db_session: AsyncSession) -> int:
        """Number of stored (real) entries."""
        result = await db_session.execute(select(func.count()).select_from(cls))
        return result.scalar_one()

    @classmethod
    async def delete_by_id(cls, db_session: AsyncSession, id: str) -> bool:
        result = await db_session.execute(delete(cls).where(cls.id == id))
        await db_session.commit()
        return result.rowcount > 0

    async def apply_boost(
        self, db_session: AsyncSession, instagram_username: str, position: int
    ) -> "QueueEntry":
        """Persist the boost fields and the new position."""
        self.instagram_username = instagram_username
        self.instagram_boost_used = True
        self.position = position
        await db_session.commit()
        await db_session.refresh(self)
        return self
