"""Thread-related Pydantic schemas."""

from __future__ import annotations

import datetime
import uuid

from pydantic import BaseModel, ConfigDict, Field

from .common import PageQuery
from .community import CommunityDTO, CommunityProfileResponse
from .user import UserDTO, UserProfileResponse


class ThreadCreate(BaseModel):
    """Schema for creating a top-level thread."""

    text: str = Field(..., min_length=1, max_length=5000)
    author_id: str = Field(..., min_length=1)
    community_id: str | None = None


class CommentCreate(BaseModel):
    """Schema for answering an existing thread."""

    thread_id: uuid.UUID
    text: str = Field(..., min_length=1, max_length=5000)
    author_id: str = Field(..., min_length=1)


class ListThreadsQuery(PageQuery):
    """Pagination parameters for the top-level thread listing."""


class ThreadDTO(BaseModel):
    """Thread with its author, community summary and comment count."""

    id: uuid.UUID
    text: str
    author_id: str
    author: UserDTO | None = None
    parent_thread_id: uuid.UUID | None = None
    community_id: str | None = None
    community: CommunityDTO | None = None
    comments_count: int = 0
    comments: list[ThreadDTO] = Field(default_factory=list)
    created_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)


class UserThreadsResponse(BaseModel):
    """A user and their top-level threads with direct comments."""

    user: UserDTO
    threads: list[ThreadDTO]


class CommunityThreadsResponse(BaseModel):
    """A community and its top-level threads with direct comments."""

    community: CommunityDTO
    threads: list[ThreadDTO]


UserProfileResponse.model_rebuild()
CommunityProfileResponse.model_rebuild()
