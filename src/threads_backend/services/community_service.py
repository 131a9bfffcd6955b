"""Community creation, listing and membership."""
from __future__ import annotations

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from threads_backend.core.errors import ConflictError, NotFoundError
from threads_backend.core.settings import Settings
from threads_backend.models import Community, CommunityMember, User
from threads_backend.repositories import ThreadRepository
from threads_backend.schemas.common import SuggestQuery
from threads_backend.schemas.community import (
    CommunityCreate,
    CommunityDTO,
    CommunityProfileResponse,
    ListCommunitiesQuery,
)
from threads_backend.services.mapping import thread_row_to_dto, to_community_dto, to_user_dto

logger = logging.getLogger(__name__)

__all__ = ["CommunityService"]


class CommunityService:
    """Request-scoped handler for community operations."""

    def __init__(self, db: Session, settings: Settings) -> None:
        self.db = db
        self.settings = settings
        self.threads = ThreadRepository(db)

    def _require_community(self, community_id: str) -> Community:
        community = self.db.get(Community, community_id)
        if community is None:
            raise NotFoundError("Community not found")
        return community

    def _require_user(self, user_id: str) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _members_count(self, community_id: str) -> int:
        return self.db.execute(
            select(func.count(CommunityMember.id)).where(
                CommunityMember.community_id == community_id
            )
        ).scalar_one()

    def _membership(self, community_id: str, user_id: str) -> CommunityMember | None:
        return self.db.execute(
            select(CommunityMember).where(
                CommunityMember.community_id == community_id,
                CommunityMember.member_id == user_id,
            )
        ).scalars().first()

    async def create_community(self, data: CommunityCreate) -> CommunityDTO:
        """Create a community owned by ``data.created_by_id``.

        The creator becomes the first member.

        Raises:
            NotFoundError: If the creator does not exist.
            ConflictError: If the identifier or username is already used.
        """
        logger.info("Create community - data: %s", data.model_dump())

        self._require_user(data.created_by_id)
        existing = self.db.execute(
            select(Community.id).where(
                or_(Community.id == data.id, Community.username == data.username)
            )
        ).first()
        if existing is not None:
            raise ConflictError("Community already exists")

        community = Community(
            id=data.id,
            username=data.username,
            name=data.name,
            bio=data.bio,
            image=data.image,
            created_by_id=data.created_by_id,
        )
        community.members.append(CommunityMember(member_id=data.created_by_id))
        try:
            self.db.add(community)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(community)
        return to_community_dto(community, members_count=1)

    async def list_communities(self, query: ListCommunitiesQuery) -> list[CommunityDTO]:
        """Return one page of communities matching the search term, ordered by name."""
        logger.info("List communities - query: %s", query.model_dump())

        members_count = (
            select(func.count(CommunityMember.id))
            .where(CommunityMember.community_id == Community.id)
            .correlate(Community)
            .scalar_subquery()
        )
        stmt = select(Community, members_count.label("members_count"))
        if query.search_term:
            term = query.search_term.lower()
            stmt = stmt.where(
                or_(
                    func.lower(Community.name).contains(term, autoescape=True),
                    func.lower(Community.username).contains(term, autoescape=True),
                )
            )
        stmt = stmt.order_by(Community.name).offset(query.offset).limit(query.take)
        return [
            to_community_dto(community, members_count=int(count or 0))
            for community, count in self.db.execute(stmt).all()
        ]

    async def get_community(self, community_id: str) -> CommunityDTO:
        """Return a single community with its member count."""
        community = self._require_community(community_id)
        return to_community_dto(community, members_count=self._members_count(community_id))

    async def add_member_to_community(self, community_id: str, user_id: str) -> None:
        """Enroll a user in a community; an existing membership is left as is.

        Raises:
            NotFoundError: If the community or the user does not exist.
        """
        logger.info("Add member - community_id: %s user_id: %s", community_id, user_id)

        self._require_community(community_id)
        self._require_user(user_id)
        if self._membership(community_id, user_id) is not None:
            return

        try:
            self.db.add(CommunityMember(community_id=community_id, member_id=user_id))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    async def remove_member_from_community(self, community_id: str, user_id: str) -> None:
        """Remove a user from a community; removing a non-member does nothing.

        Raises:
            NotFoundError: If the community or the user does not exist.
        """
        logger.info("Remove member - community_id: %s user_id: %s", community_id, user_id)

        self._require_community(community_id)
        self._require_user(user_id)
        membership = self._membership(community_id, user_id)
        if membership is None:
            return

        try:
            self.db.delete(membership)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    async def get_community_profile(self, community_id: str) -> CommunityProfileResponse:
        """Return a community with its top-level threads and members."""
        logger.info("Get community profile - community_id: %s", community_id)

        community = self._require_community(community_id)
        rows = self.threads.summaries(ThreadRepository.top_level_in_community(community_id))
        members = self.db.execute(
            select(User)
            .join(CommunityMember, CommunityMember.member_id == User.id)
            .where(CommunityMember.community_id == community_id)
            .order_by(User.name)
        ).scalars().all()
        return CommunityProfileResponse(
            community=to_community_dto(community, members_count=len(members)),
            threads=[thread_row_to_dto(row) for row in rows],
            members=[to_user_dto(user) for user in members],
        )

    async def get_suggest_communities(self, query: SuggestQuery) -> list[CommunityDTO]:
        """Return a uniform random sample of communities."""
        logger.info("Get suggest communities - query: %s", query.model_dump())

        count = query.count if query.count is not None else self.settings.default_suggest_count
        if count == 0:
            return []

        stmt = select(Community).order_by(func.random()).limit(count)
        return [to_community_dto(community) for community in self.db.execute(stmt).scalars()]
