"""Community-related Pydantic schemas."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from .common import PageQuery
from .user import UserDTO

if TYPE_CHECKING:
    from .thread import ThreadDTO


class CommunityCreate(BaseModel):
    """Schema for creating a new community."""

    id: str = Field(..., min_length=1, description="Identifier issued by the identity provider")
    username: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    bio: str = ""
    image: str = ""
    created_by_id: str = Field(..., min_length=1)


class CommunityDTO(BaseModel):
    """Community information returned by the API."""

    id: str
    name: str
    username: str
    image: str = ""
    bio: str = ""
    created_by_id: str | None = None
    created_at: datetime.datetime | None = None
    members_count: int | None = None

    model_config = ConfigDict(from_attributes=True)


class ListCommunitiesQuery(PageQuery):
    """Community search and pagination parameters."""


class CommunityProfileResponse(BaseModel):
    """A community with its top-level threads and members."""

    community: CommunityDTO
    threads: list[ThreadDTO]
    members: list[UserDTO]
