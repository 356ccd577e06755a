from app.models.drop import Drop
from app.models.queue_entry import QueueEntry
from app.models.settings import BoostSettings

__all__ = [
    "BoostSettings",
    "Drop",
    "QueueEntry",
]
