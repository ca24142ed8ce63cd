"""
Domain exceptions raised by the service layer.

Each carries the HTTP status it maps to and a message that is safe to show to
clients. The API layer turns them into ``{"message": ...}`` responses (see
``pharmacy.api.errors``). Internal details go to the log, never to the message.
"""
import logging

from fastapi import status

logger = logging.getLogger(__name__)


class PharmacyError(Exception):
    """Base class for all expected failures of a domain operation."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PharmacyError):
    """Malformed or missing input, or a reference in the body that does not resolve."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class Unauthorized(PharmacyError):
    """
    Credential mismatch.

    Same message for unknown email and wrong password so callers cannot
    enumerate accounts.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class NotFound(PharmacyError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"

    def __init__(self, resource: str = "Resource", message: str | None = None):
        super().__init__(message or f"{resource} not found")
        self.resource = resource


class Conflict(PharmacyError):
    """Uniqueness violation or an operation the current record state forbids."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class InvalidTransition(Conflict):
    """Order status change that is not part of the lifecycle."""

    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot change order status from {current} to {requested}")
        self.current = current
        self.requested = requested


class StorageConstraintError(PharmacyError):
    """
    Foreign-key or concurrency violation reported by the database.

    ``stale=True`` marks the "someone deleted it first" race, which clients
    see as 404. Everything else is a 500 with a distinguishable message.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "The operation violates a storage constraint"

    def __init__(self, message: str | None = None, stale: bool = False):
        super().__init__(message)
        self.stale = stale
        if stale:
            self.status_code = status.HTTP_404_NOT_FOUND


class InternalFault(PharmacyError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "An internal error occurred. Please try again later."

    def __init__(self, original_error: Exception | None = None):
        if original_error is not None:
            logger.error(
                f"Internal fault: {type(original_error).__name__}: {original_error}",
                exc_info=original_error,
            )
        super().__init__()
