"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import PageQuery, SuggestQuery
from .community import (
    CommunityCreate,
    CommunityDTO,
    CommunityProfileResponse,
    ListCommunitiesQuery,
)
from .thread import (
    CommentCreate,
    CommunityThreadsResponse,
    ListThreadsQuery,
    ThreadCreate,
    ThreadDTO,
    UserThreadsResponse,
)
from .user import ListUsersQuery, UserDTO, UserProfileResponse, UserUpdate

__all__ = [
    "PageQuery", "SuggestQuery",
    "CommunityCreate", "CommunityDTO", "CommunityProfileResponse", "ListCommunitiesQuery",
    "CommentCreate", "CommunityThreadsResponse", "ListThreadsQuery", "ThreadCreate",
    "ThreadDTO", "UserThreadsResponse",
    "ListUsersQuery", "UserDTO", "UserProfileResponse", "UserUpdate",
]
