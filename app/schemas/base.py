from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from core.db import as_utc


class BaseSchema(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


def utc_or_none(value: Optional[datetime]) -> Optional[datetime]:
    """Serialize stored timestamps as UTC even when the driver drops the offset."""
    return as_utc(value) if value is not None else None
