"""User-related Pydantic schemas."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from .common import PageQuery

if TYPE_CHECKING:
    from .thread import ThreadDTO


class UserDTO(BaseModel):
    """User profile returned by the API.

    Embedded author summaries only carry ``id``, ``name``, ``username`` and
    ``profile_photo``; the remaining fields keep their defaults there.
    """

    id: str
    name: str
    username: str
    bio: str = ""
    profile_photo: str = ""
    onboarded: bool = False
    created_at: datetime.datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    """Fields of a profile upsert; ``None`` keeps the stored value."""

    name: str | None = Field(None, max_length=100)
    username: str | None = Field(None, max_length=50)
    bio: str | None = Field(None, max_length=1000)


class ListUsersQuery(PageQuery):
    """Search users on behalf of ``user_id``, who is left out of the results."""

    user_id: str | None = Field(None, description="Requesting user, excluded from results")


class UserProfileResponse(BaseModel):
    """A user's profile, top-level threads and replies."""

    profile: UserDTO
    threads: list[ThreadDTO]
    replies: list[ThreadDTO]
