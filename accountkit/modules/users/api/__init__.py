"""
API Layer

Operation entry points plus the FastAPI routers that expose them.
"""

from .user_endpoints import router as user_router
from .account_endpoints import router as account_router

__all__ = [
    "user_router",
    "account_router",
]
