"""API endpoint modules for version 1."""

from .communities import router as communities_router
from .images import router as images_router
from .threads import router as threads_router
from .users import router as users_router

__all__ = [
    "communities_router",
    "images_router",
    "threads_router",
    "users_router",
]
