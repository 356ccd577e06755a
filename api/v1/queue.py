"""Public queue API endpoints."""

from fastapi import APIRouter, Depends

from api.deps import get_position_engine, get_storage
from app.schemas.drop import DropResponse
from app.schemas.queue import (
    BoostRequest,
    BoostResponse,
    DisplayEntryResponse,
    QueueJoinRequest,
    QueueJoinResponse,
    QueuePositionResponse,
    QueueStatsResponse,
)
from app.schemas.settings import SettingsResponse
from app.services.display_service import build_queue_snapshot
from app.services.position_service import PositionEngine
from app.storage import QueueStorage
from core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/queue", tags=["Queue"])


@router.get("/stats", response_model=QueueStatsResponse)
async def get_queue_stats(
    storage: QueueStorage = Depends(get_storage),
) -> QueueStatsResponse:
    """Reported queue size, top of the leaderboard and the active drop."""
    snapshot = await build_queue_snapshot(storage)
    return QueueStatsResponse(
        total_size=snapshot.total_size,
        top_entries=[
            DisplayEntryResponse.model_validate(entry) for entry in snapshot.top_entries
        ],
        active_drop=(
            DropResponse.model_validate(snapshot.active_drop)
            if snapshot.active_drop
            else None
        ),
    )


@router.post("/join", response_model=QueueJoinResponse)
async def join_queue(
    data: QueueJoinRequest,
    engine: PositionEngine = Depends(get_position_engine),
) -> QueueJoinResponse:
    """Reserve a queue position for an email."""
    entry = await engine.join(
        email=data.email, phone=data.phone, notifications=data.notifications
    )
    return QueueJoinResponse(
        id=entry.id,
        position=entry.position,
        email=entry.email,
        estimated_wait_time=engine.estimated_wait_time(entry.position),
    )


@router.get("/position/{email}", response_model=QueuePositionResponse)
async def get_position(
    email: str,
    engine: PositionEngine = Depends(get_position_engine),
) -> QueuePositionResponse:
    """Look up the position held by an email."""
    entry = await engine.lookup(email)
    return QueuePositionResponse(
        position=entry.position,
        email=entry.email,
        estimated_wait_time=engine.estimated_wait_time(entry.position),
        people_ahead=entry.position - 1,
    )


@router.post("/instagram-verify", response_model=BoostResponse)
async def verify_instagram_share(
    data: BoostRequest,
    engine: PositionEngine = Depends(get_position_engine),
) -> BoostResponse:
    """Apply the one-time boost for a claimed Instagram share."""
    result = await engine.boost(data.email, data.instagram_username)
    return BoostResponse(
        success=True,
        new_position=result.new_position,
        positions_skipped=result.positions_skipped,
        message=f"Successfully verified! You moved up {result.positions_skipped} spots!",
    )


@router.get("/settings", response_model=SettingsResponse)
async def get_boost_settings(
    storage: QueueStorage = Depends(get_storage),
) -> SettingsResponse:
    """Boost settings for the signup page."""
    settings = await storage.get_settings()
    if not settings:
        return SettingsResponse()
    return SettingsResponse.model_validate(settings)
