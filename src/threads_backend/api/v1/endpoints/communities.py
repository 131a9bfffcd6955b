"""Community-related endpoints for the Threads API."""

from __future__ import annotations

from fastapi import APIRouter, Query, Response, status

from threads_backend.schemas.common import SuggestQuery
from threads_backend.schemas.community import (
    CommunityCreate,
    CommunityDTO,
    CommunityProfileResponse,
    ListCommunitiesQuery,
)

from ..dependencies import CommunityServiceDep

router = APIRouter(prefix="/communities", tags=["communities"])


@router.post("/", response_model=CommunityDTO, status_code=status.HTTP_201_CREATED)
async def create_community(
    community_data: CommunityCreate,
    service: CommunityServiceDep,
) -> CommunityDTO:
    """Create a new community."""
    return await service.create_community(community_data)


@router.get("/", response_model=list[CommunityDTO])
async def list_communities(
    service: CommunityServiceDep,
    search_term: str | None = Query(None, description="Matches name or username"),
    skip: int = Query(0, ge=0, description="Zero-based page index"),
    take: int = Query(20, ge=1, le=100, description="Page size"),
) -> list[CommunityDTO]:
    """List communities ordered by name."""
    query = ListCommunitiesQuery(search_term=search_term, skip=skip, take=take)
    return await service.list_communities(query)


@router.get("/suggest", response_model=list[CommunityDTO])
async def get_suggest_communities(
    service: CommunityServiceDep,
    count: int | None = Query(None, ge=0, le=50),
) -> list[CommunityDTO]:
    """Return a random selection of communities."""
    return await service.get_suggest_communities(SuggestQuery(count=count))


@router.get("/{community_id}", response_model=CommunityDTO)
async def get_community(community_id: str, service: CommunityServiceDep) -> CommunityDTO:
    """Get a specific community by ID."""
    return await service.get_community(community_id)


@router.get("/{community_id}/profile", response_model=CommunityProfileResponse)
async def get_community_profile(
    community_id: str,
    service: CommunityServiceDep,
) -> CommunityProfileResponse:
    """Return a community with its threads and members."""
    return await service.get_community_profile(community_id)


@router.post("/{community_id}/members/{user_id}")
async def add_member_to_community(
    community_id: str,
    user_id: str,
    service: CommunityServiceDep,
) -> dict[str, str]:
    """Join a community."""
    await service.add_member_to_community(community_id, user_id)
    return {"status": "joined"}


@router.delete(
    "/{community_id}/members/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def remove_member_from_community(
    community_id: str,
    user_id: str,
    service: CommunityServiceDep,
) -> Response:
    """Leave a community."""
    await service.remove_member_from_community(community_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
