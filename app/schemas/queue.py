"""Queue schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, EmailStr, Field, field_validator

from app.schemas.base import BaseSchema, utc_or_none
from app.schemas.drop import DropResponse
from app.utils.emails import normalize_email


class QueueJoinRequest(BaseSchema):
    """Schema for reserving a queue position."""

    email: EmailStr
    phone: Optional[str] = Field(None, max_length=32)
    notifications: bool = False

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("phone")
    @classmethod
    def blank_phone_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None


class QueueJoinResponse(BaseSchema):
    id: str
    position: int
    email: str
    estimated_wait_time: int


class QueuePositionResponse(BaseSchema):
    position: int
    email: str
    estimated_wait_time: int
    people_ahead: int


class BoostRequest(BaseSchema):
    """Claimed Instagram share; the handle is trusted, not verified."""

    email: EmailStr
    instagram_username: str = Field(
        ...,
        min_length=1,
        max_length=64,
        validation_alias=AliasChoices(
            "instagramUsername", "instagram_username", "claimedHandle"
        ),
    )

    @field_validator("instagram_username")
    @classmethod
    def strip_handle(cls, value: str) -> str:
        handle = value.strip().lstrip("@")
        if not handle:
            raise ValueError("Instagram username is required")
        return handle


class BoostResponse(BaseSchema):
    success: bool = True
    new_position: int
    positions_skipped: int
    message: str


class DisplayEntryResponse(BaseSchema):
    position: int
    email: str
    joined_at: datetime


class QueueStatsResponse(BaseSchema):
    total_size: int
    top_entries: List[DisplayEntryResponse]
    active_drop: Optional[DropResponse] = None


class QueueEntryResponse(BaseSchema):
    """Full entry, for the admin signups view."""

    id: str
    email: str
    phone: Optional[str]
    notifications: bool
    position: int
    instagram_username: Optional[str]
    instagram_boost_used: bool
    joined_at: datetime

    @field_validator("joined_at")
    @classmethod
    def joined_at_utc(cls, value: datetime) -> datetime:
        return utc_or_none(value)
