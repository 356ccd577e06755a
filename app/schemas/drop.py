"""Drop schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.schemas.base import BaseSchema, utc_or_none
from core.config import config


class DropCreate(BaseSchema):
    """Schema for scheduling a drop."""

    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    drop_time: datetime
    is_active: bool = True
    max_queue_size: int = Field(config.DEFAULT_DROP_CAPACITY, ge=1)

    @field_validator("drop_time")
    @classmethod
    def drop_time_utc(cls, value: datetime) -> datetime:
        return utc_or_none(value)


class DropUpdate(BaseSchema):
    """Partial update; only fields present in the body change."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    drop_time: Optional[datetime] = None
    is_active: Optional[bool] = None
    max_queue_size: Optional[int] = Field(None, ge=1)

    @field_validator("drop_time")
    @classmethod
    def drop_time_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return utc_or_none(value)


class DropResponse(BaseSchema):
    id: str
    name: str
    description: Optional[str]
    drop_time: datetime
    is_active: bool
    max_queue_size: int
    created_at: datetime

    @field_validator("drop_time", "created_at")
    @classmethod
    def timestamps_utc(cls, value: datetime) -> datetime:
        return utc_or_none(value)
