from core.exceptions.base import (
    CustomException,
    BadRequestException,
    UnauthorizedException,
    NotFoundException,
    ConflictException,
    ValidationException,
)
from core.exceptions.queue import (
    AlreadyBoostedException,
    CapacityExceededException,
    DropNotFoundException,
    DuplicateEmailException,
    QueueEntryNotFoundException,
)

__all__ = [
    "CustomException",
    "BadRequestException",
    "UnauthorizedException",
    "NotFoundException",
    "ConflictException",
    "ValidationException",
    "AlreadyBoostedException",
    "CapacityExceededException",
    "DropNotFoundException",
    "DuplicateEmailException",
    "QueueEntryNotFoundException",
]
