"""Business logic services for the Threads application."""

from .community_service import CommunityService
from .images import ImageService
from .thread_service import ThreadService
from .user_service import UserService

__all__ = [
    "CommunityService",
    "ImageService",
    "ThreadService",
    "UserService",
]
