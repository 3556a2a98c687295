"""Request, lookup and store-level domain exceptions."""

from .base import DomainException


class InvalidRequestException(DomainException):
    """Raised when input fails validation. Nothing has been written."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_REQUEST",
        )


class NotFoundException(DomainException):
    """Raised when a referenced record does not exist (or is not the caller's)."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            message=f"{resource} not found: {resource_id}",
            code=f"{resource.upper().replace(' ', '_')}_NOT_FOUND",
        )
        self.resource = resource
        self.resource_id = resource_id


class UserNotFoundException(NotFoundException):
    def __init__(self, user_id: str):
        super().__init__("User", user_id)
        self.user_id = user_id


class DuplicateUserException(DomainException):
    """Raised when registering an email that is already taken."""

    def __init__(self, email: str):
        super().__init__(
            message=f"A user with email {email} already exists",
            code="DUPLICATE_USER",
        )
        self.email = email


class TransactionNotFoundException(NotFoundException):
    def __init__(self, transaction_id: str):
        super().__init__("Transaction", transaction_id)


class NotificationNotFoundException(NotFoundException):
    def __init__(self, notification_id: str):
        super().__init__("Notification", notification_id)


class ConflictException(DomainException):
    """
    Raised when a concurrent writer changed the same row first.

    The unit of work raises it on stale versions, serialization failures and
    unique-constraint races; services retry once before surfacing it.
    """

    def __init__(self, message: str = "The record was modified concurrently. Please retry."):
        super().__init__(
            message=message,
            code="CONFLICT",
        )
