"""
Account Errors

Every error carries an ``error_kind`` used by the operation boundary to
build structured failure responses.
"""


class AccountError(Exception):
    """Base exception for account service errors"""
    error_kind = "InternalError"


class NotFoundError(AccountError):
    """Raised when an entity is absent"""
    error_kind = "NotFoundError"


class UserNotFoundError(NotFoundError):
    """Raised when a user id does not resolve"""

    def __init__(self, user_id: str):
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class InvalidTransitionError(AccountError):
    """Raised when an illegal lifecycle move is attempted"""
    error_kind = "InvalidTransitionError"


class StorageError(AccountError):
    """Raised when the persistence layer is unavailable or rejects a write"""
    error_kind = "StorageError"


class TransportError(AccountError):
    """Raised when a notification channel send fails"""
    error_kind = "TransportError"

    def __init__(self, channel: str, message: str):
        super().__init__(f"{channel} send failed: {message}")
        self.channel = channel


class ValidationError(AccountError, ValueError):
    """Raised when input does not match the user schema"""
    error_kind = "ValidationError"


class AlreadyExistsError(AccountError):
    """Raised when creating a user whose id is already taken"""
    error_kind = "AlreadyExistsError"

    def __init__(self, user_id: str):
        super().__init__(f"User already exists: {user_id}")
        self.user_id = user_id
