from core.db.base import Base
from core.db.mixins import CreatedAtMixin, TimestampMixin, as_utc, utcnow
from core.db.session import async_session_factory, engine, get_db

__all__ = [
    "Base",
    "CreatedAtMixin",
    "TimestampMixin",
    "as_utc",
    "utcnow",
    "async_session_factory",
    "engine",
    "get_db",
]
