"""Boost settings model (single logical row)."""

from typing import Optional
from uuid import uuid4

from sqlalchemy import Boolean, String, Text, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapped, mapped_column

from core.db import Base, TimestampMixin


class BoostSettings(Base, TimestampMixin):
    """Instagram boost configuration shown on the signup page."""

    __tablename__ = "settings"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    instagram_post_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    instagram_boost_enabled: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )

    @classmethod
    async def get_current(
        cls, db_session: AsyncSession
    ) -> Optional["BoostSettings"]:
        """The settings row, oldest first in case a second one ever slipped in."""
        result = await db_session.execute(
            select(cls).order_by(cls.created_at).limit(1)
        )
        return result.scalars().first()
