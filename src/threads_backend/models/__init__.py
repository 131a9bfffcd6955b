"""SQLAlchemy models for the Threads application."""

from .community import Community, CommunityMember
from .thread import Thread
from .user import User

__all__ = [
    "Community", "CommunityMember",
    "Thread",
    "User",
]
