from app.storage.base import QueueStorage
from app.storage.database import DatabaseStorage
from app.storage.memory import MemoryStorage, get_memory_storage

__all__ = [
    "DatabaseStorage",
    "MemoryStorage",
    "QueueStorage",
    "get_memory_storage",
]
