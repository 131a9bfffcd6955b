"""Thread-related endpoints for the Threads API."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Query

from threads_backend.schemas.thread import (
    CommentCreate,
    CommunityThreadsResponse,
    ListThreadsQuery,
    ThreadCreate,
    ThreadDTO,
    UserThreadsResponse,
)

from ..dependencies import ThreadServiceDep

router = APIRouter(prefix="/threads", tags=["threads"])


@router.post("/", response_model=ThreadDTO)
async def create_thread(body: ThreadCreate, service: ThreadServiceDep) -> ThreadDTO:
    """Create a top-level thread."""
    return await service.create_thread(body)


@router.get("/", response_model=list[ThreadDTO])
async def list_threads(
    service: ThreadServiceDep,
    skip: int = Query(0, ge=0, description="Zero-based page index"),
    take: int = Query(20, ge=1, le=100, description="Page size"),
) -> list[ThreadDTO]:
    """List top-level threads, newest first."""
    return await service.list_threads(ListThreadsQuery(skip=skip, take=take))


@router.get("/user/{user_id}", response_model=UserThreadsResponse)
async def get_user_threads(user_id: str, service: ThreadServiceDep) -> UserThreadsResponse:
    """Get a user's top-level threads with their comments."""
    return await service.get_user_threads(user_id)


@router.get("/community/{community_id}", response_model=CommunityThreadsResponse)
async def get_community_threads(
    community_id: str,
    service: ThreadServiceDep,
) -> CommunityThreadsResponse:
    """Get a community's top-level threads with their comments."""
    return await service.get_community_threads(community_id)


@router.post("/add/comment", response_model=ThreadDTO)
async def add_comment_to_thread(body: CommentCreate, service: ThreadServiceDep) -> ThreadDTO:
    """Comment on an existing thread."""
    return await service.add_comment_to_thread(body)


@router.get("/{thread_id}", response_model=ThreadDTO)
async def get_thread(thread_id: uuid.UUID, service: ThreadServiceDep) -> ThreadDTO:
    """Get a specific thread with its comments."""
    return await service.get_thread(thread_id)
