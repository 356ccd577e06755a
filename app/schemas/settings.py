"""Boost settings schemas."""

from datetime import datetime
from typing import Optional

from pydantic import HttpUrl, field_validator

from app.schemas.base import BaseSchema, utc_or_none


class SettingsUpdate(BaseSchema):
    instagram_post_url: Optional[HttpUrl] = None
    instagram_boost_enabled: bool = False


class SettingsResponse(BaseSchema):
    """Current boost settings; ``id`` is null until the first save."""

    id: Optional[str] = None
    instagram_post_url: Optional[str] = None
    instagram_boost_enabled: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def timestamps_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return utc_or_none(value)
