"""Tests for community creation, membership and profiles."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from threads_backend.core.errors import ConflictError, NotFoundError
from threads_backend.models import CommunityMember
from threads_backend.schemas.common import SuggestQuery
from threads_backend.schemas.community import CommunityCreate, ListCommunitiesQuery
from threads_backend.services.community_service import CommunityService


@pytest.fixture()
def service(db_session, test_settings) -> CommunityService:
    return CommunityService(db_session, test_settings)


def _membership_count(db_session, community_id: str, user_id: str) -> int:
    return db_session.execute(
        select(func.count(CommunityMember.id)).where(
            CommunityMember.community_id == community_id,
            CommunityMember.member_id == user_id,
        )
    ).scalar_one()


@pytest.mark.asyncio
async def test_create_community_enrolls_creator(service, db_session, test_user) -> None:
    result = await service.create_community(
        CommunityCreate(
            id="org_hikers",
            username="hikers",
            name="Hikers",
            created_by_id=test_user.id,
        )
    )

    assert result.id == "org_hikers"
    assert result.created_by_id == test_user.id
    assert result.members_count == 1
    assert _membership_count(db_session, "org_hikers", test_user.id) == 1


@pytest.mark.asyncio
async def test_create_community_requires_creator(service) -> None:
    with pytest.raises(NotFoundError):
        await service.create_community(
            CommunityCreate(id="org_x", username="x", name="X", created_by_id="user_ghost")
        )


@pytest.mark.asyncio
async def test_create_community_rejects_taken_username(service, community, test_user) -> None:
    with pytest.raises(ConflictError):
        await service.create_community(
            CommunityCreate(
                id="org_other",
                username=community.username,
                name="Copy",
                created_by_id=test_user.id,
            )
        )


@pytest.mark.asyncio
async def test_add_member_is_idempotent(service, db_session, community, other_user) -> None:
    await service.add_member_to_community(community.id, other_user.id)
    await service.add_member_to_community(community.id, other_user.id)

    assert _membership_count(db_session, community.id, other_user.id) == 1
    assert (await service.get_community(community.id)).members_count == 2


@pytest.mark.asyncio
async def test_add_member_unknown_community_or_user(service, community, other_user) -> None:
    with pytest.raises(NotFoundError):
        await service.add_member_to_community("org_missing", other_user.id)
    with pytest.raises(NotFoundError):
        await service.add_member_to_community(community.id, "user_missing")


@pytest.mark.asyncio
async def test_remove_member(service, db_session, community, other_user) -> None:
    await service.add_member_to_community(community.id, other_user.id)
    await service.remove_member_from_community(community.id, other_user.id)

    assert _membership_count(db_session, community.id, other_user.id) == 0

    # Removing again is a no-op.
    await service.remove_member_from_community(community.id, other_user.id)


@pytest.mark.asyncio
async def test_remove_member_unknown_community(service, other_user) -> None:
    with pytest.raises(NotFoundError):
        await service.remove_member_from_community("org_missing", other_user.id)


@pytest.mark.asyncio
async def test_list_communities_search_and_pages(service, db_session, test_user) -> None:
    for slug in ("alpha", "beta", "gamma"):
        await service.create_community(
            CommunityCreate(
                id=f"org_{slug}",
                username=slug,
                name=slug.title(),
                created_by_id=test_user.id,
            )
        )

    found = await service.list_communities(ListCommunitiesQuery(search_term="AMM"))
    assert [community.username for community in found] == ["gamma"]

    second_page = await service.list_communities(ListCommunitiesQuery(skip=1, take=2))
    assert [community.username for community in second_page] == ["gamma"]
    assert second_page[0].members_count == 1


@pytest.mark.asyncio
async def test_community_profile(service, community, test_user, other_user, make_thread) -> None:
    post = make_thread(test_user, "welcome", community=community)
    make_thread(other_user, "hello!", community=community, parent=post)
    make_thread(other_user, "outside the club")
    await service.add_member_to_community(community.id, other_user.id)

    profile = await service.get_community_profile(community.id)

    assert profile.community.id == community.id
    assert [thread.id for thread in profile.threads] == [post.id]
    assert profile.threads[0].comments_count == 1
    assert sorted(member.id for member in profile.members) == sorted([test_user.id, other_user.id])


@pytest.mark.asyncio
async def test_get_community_not_found(service) -> None:
    with pytest.raises(NotFoundError):
        await service.get_community("org_missing")


@pytest.mark.asyncio
async def test_suggest_communities(service, community) -> None:
    assert await service.get_suggest_communities(SuggestQuery(count=0)) == []
    suggested = await service.get_suggest_communities(SuggestQuery(count=4))
    assert [item.id for item in suggested] == [community.id]
