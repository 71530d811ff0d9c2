"""
Data Access Layer (Repositories)

The store owns the persisted items; the repository is the only way domain
code reaches it.
"""

from .user_store import UserStore
from .user_repository import UserRepository

__all__ = [
    "UserStore",
    "UserRepository",
]
