"""
Domain Models

Pure data models and errors for the user entity.
"""

from .user import User
from .events import UserEvent
from .errors import (
    AccountError,
    AlreadyExistsError,
    NotFoundError,
    UserNotFoundError,
    InvalidTransitionError,
    StorageError,
    TransportError,
    ValidationError,
)

__all__ = [
    "User",
    "UserEvent",
    "AccountError",
    "AlreadyExistsError",
    "NotFoundError",
    "UserNotFoundError",
    "InvalidTransitionError",
    "StorageError",
    "TransportError",
    "ValidationError",
]
