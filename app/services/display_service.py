"""Public queue snapshot: reported size, leaderboard and countdown drop.

Everything here is presentation. The baseline crowd and the simulated growth
never touch stored positions.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from app.models import Drop, QueueEntry
from app.storage import QueueStorage
from core.config import Settings, config
from core.db import as_utc, utcnow

# (position, masked email, minutes since joining)
BASELINE_TOP_ENTRIES = (
    (1, "alex***@gmail.com", 120),
    (2, "jordan***@yahoo.com", 110),
    (3, "sam***@hotmail.com", 100),
    (4, "casey***@gmail.com", 90),
    (5, "taylor***@outlook.com", 85),
    (6, "morgan***@gmail.com", 80),
    (7, "riley***@yahoo.com", 75),
    (8, "blake***@icloud.com", 70),
    (9, "jamie***@gmail.com", 65),
    (10, "drew***@hotmail.com", 60),
    (11, "avery***@gmail.com", 55),
    (12, "quinn***@yahoo.com", 50),
    (13, "sage***@outlook.com", 45),
    (14, "rowan***@gmail.com", 40),
    (15, "phoenix***@icloud.com", 35),
)


@dataclass
class DisplayEntry:
    position: int
    email: str
    joined_at: datetime


@dataclass
class QueueSnapshot:
    total_size: int
    top_entries: List[DisplayEntry] = field(default_factory=list)
    active_drop: Optional[Drop] = None


def mask_email(email: str) -> str:
    """Hide most of the local part: ``alexander@x.com`` -> ``al***@x.com``."""
    local_part, _, domain = email.partition("@")
    if len(local_part) <= 3:
        return f"{local_part[:1]}***@{domain}"
    return f"{local_part[:2]}***@{domain}"


def simulated_growth(
    seconds_until_drop: float, horizon_seconds: int, interval_seconds: int
) -> int:
    """Extra people shown joining during the last ``horizon_seconds``.

    One person per ``interval_seconds`` once the drop is inside the horizon.
    A drop in the past counts as zero seconds away.
    """
    seconds_until_drop = max(0.0, seconds_until_drop)
    if seconds_until_drop > horizon_seconds:
        return 0
    return math.floor((horizon_seconds - seconds_until_drop) / interval_seconds)


def compute_total_size(
    real_count: int,
    drop_time: Optional[datetime] = None,
    now: Optional[datetime] = None,
    settings: Optional[Settings] = None,
) -> int:
    """Reported queue size.

    Real entries plus the baseline crowd, clamped to the hard capacity. With
    an active drop the simulated growth is added. The result is always
    capped at MAX_SIMULATED_QUEUE_SIZE, so it never decreases as ``now``
    approaches ``drop_time`` and never jumps when a drop is scheduled.
    """
    settings = settings or config
    total = min(
        settings.QUEUE_HARD_CAPACITY, real_count + settings.QUEUE_BASELINE_OFFSET
    )
    if drop_time is None:
        return min(settings.MAX_SIMULATED_QUEUE_SIZE, total)

    now = now or utcnow()
    seconds_until_drop = (as_utc(drop_time) - as_utc(now)).total_seconds()
    growth = simulated_growth(
        seconds_until_drop,
        settings.GROWTH_HORIZON_SECONDS,
        settings.GROWTH_INTERVAL_SECONDS,
    )
    return min(settings.MAX_SIMULATED_QUEUE_SIZE, total + growth)


def top_entries(
    entries: Sequence[QueueEntry], now: datetime, limit: int
) -> List[DisplayEntry]:
    """Merge the baseline leaderboard with masked real entries."""
    merged = [
        DisplayEntry(
            position=position,
            email=masked,
            joined_at=now - timedelta(minutes=minutes_ago),
        )
        for position, masked, minutes_ago in BASELINE_TOP_ENTRIES
    ]
    merged.extend(
        DisplayEntry(
            position=entry.position,
            email=mask_email(entry.email),
            joined_at=as_utc(entry.joined_at),
        )
        for entry in entries
    )
    merged.sort(key=lambda e: e.position)
    return merged[:limit]


async def build_queue_snapshot(
    storage: QueueStorage,
    now: Optional[datetime] = None,
    settings: Optional[Settings] = None,
) -> QueueSnapshot:
    """Read-only view of the queue for the stats endpoint."""
    settings = settings or config
    now = now or utcnow()

    entries = await storage.list_entries()
    active_drop = await storage.get_active_drop()

    total_size = compute_total_size(
        real_count=len(entries),
        drop_time=active_drop.drop_time if active_drop else None,
        now=now,
        settings=settings,
    )
    return QueueSnapshot(
        total_size=total_size,
        top_entries=top_entries(entries, now, settings.TOP_ENTRIES_LIMIT),
        active_drop=active_drop,
    )
