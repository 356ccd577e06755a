import secrets
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.services.position_service import PositionEngine
from app.storage import DatabaseStorage, QueueStorage, get_memory_storage
from core.config import config
from core.db import get_db
from core.exceptions import UnauthorizedException


async def get_storage(
    db_session: AsyncSession = Depends(get_db),
) -> QueueStorage:
    """Storage backend selected by STORAGE_BACKEND."""
    if config.STORAGE_BACKEND == "memory":
        return get_memory_storage()
    return DatabaseStorage(db_session)


async def get_position_engine(
    storage: QueueStorage = Depends(get_storage),
) -> PositionEngine:
    return PositionEngine(storage)


async def require_admin(
    x_admin_key: Optional[str] = Header(None, alias="X-Admin-Key"),
) -> None:
    """Reject admin calls without the shared key. No-op when ADMIN_API_KEY is unset."""
    if not config.ADMIN_API_KEY:
        return
    if not x_admin_key or not secrets.compare_digest(x_admin_key, config.ADMIN_API_KEY):
        raise UnauthorizedException()
