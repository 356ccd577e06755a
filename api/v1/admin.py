"""Admin API endpoints for drops, signups and boost settings."""

from typing import List

from fastapi import APIRouter, Depends, status

from api.deps import get_storage, require_admin
from app.schemas.drop import DropCreate, DropResponse, DropUpdate
from app.schemas.queue import QueueEntryResponse
from app.schemas.settings import SettingsResponse, SettingsUpdate
from app.storage import QueueStorage
from core.exceptions import DropNotFoundException, QueueEntryNotFoundException
from core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(
    prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)]
)


# Drops


@router.get("/drops", response_model=List[DropResponse])
async def list_drops(
    storage: QueueStorage = Depends(get_storage),
) -> List[DropResponse]:
    """List drops, newest first."""
    drops = await storage.list_drops()
    return [DropResponse.model_validate(d) for d in drops]


@router.post("/drops", response_model=DropResponse, status_code=status.HTTP_201_CREATED)
async def create_drop(
    data: DropCreate,
    storage: QueueStorage = Depends(get_storage),
) -> DropResponse:
    drop = await storage.create_drop(**data.model_dump())
    logger.info(f"Drop {drop.id} scheduled for {drop.drop_time.isoformat()}")
    return DropResponse.model_validate(drop)


@router.put("/drops/{drop_id}", response_model=DropResponse)
async def update_drop(
    drop_id: str,
    data: DropUpdate,
    storage: QueueStorage = Depends(get_storage),
) -> DropResponse:
    """Partially update a drop."""
    updates = {
        key: value
        for key, value in data.model_dump(exclude_unset=True).items()
        if value is not None or key == "description"
    }
    drop = await storage.update_drop(drop_id, **updates)
    if not drop:
        raise DropNotFoundException()
    logger.info(f"Drop {drop_id} updated")
    return DropResponse.model_validate(drop)


@router.delete("/drops/{drop_id}")
async def delete_drop(
    drop_id: str,
    storage: QueueStorage = Depends(get_storage),
) -> dict:
    if not await storage.delete_drop(drop_id):
        raise DropNotFoundException()
    logger.info(f"Drop {drop_id} deleted")
    return {"message": "Drop deleted successfully"}


# Signups


@router.get("/queue", response_model=List[QueueEntryResponse])
async def list_queue_entries(
    storage: QueueStorage = Depends(get_storage),
) -> List[QueueEntryResponse]:
    """All real signups ordered by position."""
    entries = await storage.list_entries()
    return [QueueEntryResponse.model_validate(e) for e in entries]


@router.get("/queue/{entry_id}", response_model=QueueEntryResponse)
async def get_queue_entry(
    entry_id: str,
    storage: QueueStorage = Depends(get_storage),
) -> QueueEntryResponse:
    entry = await storage.get_entry(entry_id)
    if not entry:
        raise QueueEntryNotFoundException(message="Queue entry not found")
    return QueueEntryResponse.model_validate(entry)


@router.delete("/queue/{entry_id}")
async def delete_queue_entry(
    entry_id: str,
    storage: QueueStorage = Depends(get_storage),
) -> dict:
    """Remove a signup. Other entries keep their positions."""
    if not await storage.delete_entry(entry_id):
        raise QueueEntryNotFoundException(message="Queue entry not found")
    logger.info(f"Queue entry {entry_id} deleted by admin")
    return {"message": "Queue entry deleted successfully"}


# Settings


@router.get("/settings", response_model=SettingsResponse)
async def get_settings(
    storage: QueueStorage = Depends(get_storage),
) -> SettingsResponse:
    """Current boost settings, or defaults when none were saved yet."""
    settings = await storage.get_settings()
    if not settings:
        return SettingsResponse()
    return SettingsResponse.model_validate(settings)


@router.put("/settings", response_model=SettingsResponse)
async def update_settings(
    data: SettingsUpdate,
    storage: QueueStorage = Depends(get_storage),
) -> SettingsResponse:
    settings = await storage.upsert_settings(
        instagram_post_url=str(data.instagram_post_url) if data.instagram_post_url else None,
        instagram_boost_enabled=data.instagram_boost_enabled,
    )
    logger.info(
        f"Boost settings saved (enabled={settings.instagram_boost_enabled})"
    )
    return SettingsResponse.model_validate(settings)
