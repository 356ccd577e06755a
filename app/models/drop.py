"""Drop (scheduled sale) model."""

from datetime import datetime
from typing import Optional, Sequence
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, Integer, String, Text, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapped, mapped_column

from core.db import Base, CreatedAtMixin


class Drop(Base, CreatedAtMixin):
    """A scheduled sales event the queue counts down to."""

    __tablename__ = "drops"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    drop_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    max_queue_size: Mapped[int] = mapped_column(Integer, default=300, nullable=False)

    @classmethod
    async def get_by_id(cls, db_session: AsyncSession, id: str) -> Optional["Drop"]:
        """Get drop by ID."""
        result = await db_session.execute(select(cls).where(cls.id == id))
        return result.scalars().first()

    @classmethod
    async def get_all(cls, db_session: AsyncSession) -> Sequence["Drop"]:
        """Get all drops, newest first."""
        result = await db_session.execute(
            select(cls).order_by(cls.created_at.desc())
        )
        return result.scalars().all()

    @classmethod
    async def get_active(cls, db_session: AsyncSession) -> Optional["Drop"]:
        """Most recently created active drop, if any."""
        result = await db_session.execute(
            select(cls)
            .where(cls.is_active == True)
            .order_by(cls.created_at.desc())
            .limit(1)
        )
        return result.scalars().first()

    async def update(self, db_session: AsyncSession, **kwargs) -> "Drop":
        """Update drop fields."""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
        await db_session.commit()
        await db_session.refresh(self)
        return self
