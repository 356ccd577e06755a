"""Queue position assignment and boosts."""

import math
from dataclasses import dataclass
from typing import Optional

from app.models import QueueEntry
from app.storage import QueueStorage
from app.utils.emails import normalize_email
from core.config import Settings, config
from core.exceptions import (
    AlreadyBoostedException,
    CapacityExceededException,
    DuplicateEmailException,
    QueueEntryNotFoundException,
)
from core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class BoostResult:
    """Outcome of a successful boost."""

    entry: QueueEntry
    old_position: int
    new_position: int

    @property
    def positions_skipped(self) -> int:
        return self.old_position - self.new_position


def estimate_wait_minutes(position: int, throughput_per_minute: int) -> int:
    """Minutes until ``position`` is served at the assumed throughput."""
    return math.ceil(position / throughput_per_minute)


def boosted_position(position: int, boost_amount: int) -> int:
    """Position after a boost; never below 1 and never above ``position``."""
    return max(1, position - boost_amount)


class PositionEngine:
    """Assigns positions on signup and moves an entry forward on boost.

    Positions come from the stored count at signup time. Nothing is
    renumbered when one entry jumps ahead, so positions may collide. The
    count-then-insert sequence is not serialized either: two concurrent
    signups can read the same count and receive the same position. Email
    uniqueness is still guaranteed by the store.
    """

    def __init__(self, storage: QueueStorage, settings: Optional[Settings] = None):
        self.storage = storage
        self.settings = settings or config

    def estimated_wait_time(self, position: int) -> int:
        return estimate_wait_minutes(position, self.settings.THROUGHPUT_PER_MINUTE)

    async def join(
        self,
        email: str,
        phone: Optional[str] = None,
        notifications: bool = False,
    ) -> QueueEntry:
        """Add ``email`` to the queue behind everyone already stored.

        Raises:
            DuplicateEmailException: the email already holds a position
            CapacityExceededException: the reported queue is already full
        """
        email = normalize_email(email)
        if await self.storage.get_entry_by_email(email):
            raise DuplicateEmailException()

        real_count = await self.storage.count_entries()
        if real_count + self.settings.QUEUE_BASELINE_OFFSET >= self.settings.QUEUE_HARD_CAPACITY:
            logger.warning(f"Signup rejected, queue full ({real_count} real entries)")
            raise CapacityExceededException()

        position = real_count + 1 + self.settings.QUEUE_BASELINE_OFFSET
        # The store re-checks the email for signups racing past the lookup above
        entry = await self.storage.create_entry(
            email=email,
            position=position,
            phone=phone,
            notifications=notifications,
        )
        logger.info(f"Queue entry {entry.id} joined at position {entry.position}")
        return entry

    async def lookup(self, email: str) -> QueueEntry:
        entry = await self.storage.get_entry_by_email(normalize_email(email))
        if not entry:
            raise QueueEntryNotFoundException()
        return entry

    async def boost(self, email: str, instagram_username: str) -> BoostResult:
        """Apply the one-time share boost to the entry for ``email``.

        Raises:
            QueueEntryNotFoundException: no entry for this email
            AlreadyBoostedException: the boost was already used
        """
        entry = await self.lookup(email)
        if entry.instagram_boost_used:
            raise AlreadyBoostedException()

        old_position = entry.position
        new_position = boosted_position(old_position, self.settings.BOOST_AMOUNT)
        updated = await self.storage.update_entry_boost(
            entry.id, instagram_username, new_position
        )
        if updated is None:
            # Deleted by an admin between the lookup and the update
            raise QueueEntryNotFoundException()

        logger.info(
            f"Queue entry {updated.id} boosted from {old_position} to {new_position}"
        )
        return BoostResult(
            entry=updated, old_position=old_position, new_position=new_position
        )
