"""Domain errors raised by the queue, drop and settings stores."""

from core.exceptions.base import BadRequestException, ConflictException, NotFoundException


class DuplicateEmailException(ConflictException):
    """Signup with an email that already holds a queue position."""

    error_code = "DUPLICATE_EMAIL"
    message = "Email already exists in queue"


class QueueEntryNotFoundException(NotFoundException):
    message = "Email not found in queue"


class DropNotFoundException(NotFoundException):
    message = "Drop not found"


class AlreadyBoostedException(ConflictException):
    """The one-time Instagram boost was already used for this entry."""

    error_code = "ALREADY_BOOSTED"
    message = "Instagram boost already used for this email"


class CapacityExceededException(BadRequestException):
    error_code = "CAPACITY_EXCEEDED"
    message = "Queue is full"
