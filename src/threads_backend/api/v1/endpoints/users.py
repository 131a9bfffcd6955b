"""User endpoints: search, suggestions, profile upsert and aggregation."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, File, Form, Query, UploadFile

from threads_backend.schemas.common import SuggestQuery
from threads_backend.schemas.thread import ThreadDTO
from threads_backend.schemas.user import (
    ListUsersQuery,
    UserDTO,
    UserProfileResponse,
    UserUpdate,
)

from ..dependencies import UserServiceDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=list[UserDTO])
async def list_users(
    service: UserServiceDep,
    user_id: str | None = Query(None, description="Requesting user, excluded from results"),
    search_term: str | None = Query(None, description="Matches name or username"),
    skip: int = Query(0, ge=0, description="Zero-based page index"),
    take: int = Query(20, ge=1, le=100, description="Page size"),
) -> list[UserDTO]:
    """Search users by name or username."""
    query = ListUsersQuery(user_id=user_id, search_term=search_term, skip=skip, take=take)
    return await service.list_users(query)


@router.get("/suggest", response_model=list[UserDTO])
async def get_suggest_users(
    service: UserServiceDep,
    count: int | None = Query(None, ge=0, le=50),
) -> list[UserDTO]:
    """Return a random selection of users."""
    return await service.get_suggest_users(SuggestQuery(count=count))


@router.get("/{user_id}", response_model=UserDTO)
async def get_user(user_id: str, service: UserServiceDep) -> UserDTO:
    """Get a specific user by ID."""
    return await service.get_user(user_id)


@router.put("/{user_id}", response_model=UserDTO)
async def update_user(
    user_id: str,
    service: UserServiceDep,
    name: Annotated[str | None, Form(max_length=100)] = None,
    username: Annotated[str | None, Form(max_length=50)] = None,
    bio: Annotated[str | None, Form(max_length=1000)] = None,
    profile_photo: Annotated[UploadFile | None, File()] = None,
) -> UserDTO:
    """Create the user on first onboarding or update the supplied fields."""
    data = UserUpdate(name=name, username=username, bio=bio)
    return await service.update_user(user_id, data, profile_photo)


@router.get("/{user_id}/profile", response_model=UserProfileResponse)
async def get_user_profile(user_id: str, service: UserServiceDep) -> UserProfileResponse:
    """Return the user's profile, threads and replies."""
    return await service.get_user_profile(user_id)


@router.get("/{user_id}/activity", response_model=list[ThreadDTO])
async def get_user_activity(user_id: str, service: UserServiceDep) -> list[ThreadDTO]:
    """Return comments other users left on the user's threads."""
    return await service.get_user_activity(user_id)
