"""User listing, profile upsert and profile aggregation."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence

from fastapi import UploadFile
from sqlalchemy import Row, Select, func, or_, select
from sqlalchemy.orm import Session

from threads_backend.core.errors import ConflictError, NotFoundError
from threads_backend.core.settings import Settings
from threads_backend.models import User
from threads_backend.repositories import ThreadRepository
from threads_backend.schemas.common import SuggestQuery
from threads_backend.schemas.thread import ThreadDTO
from threads_backend.schemas.user import (
    ListUsersQuery,
    UserDTO,
    UserProfileResponse,
    UserUpdate,
)
from threads_backend.services.images import ImageService
from threads_backend.services.mapping import thread_row_to_dto, to_thread_dto, to_user_dto

logger = logging.getLogger(__name__)

__all__ = ["UserService"]


class UserService:
    """Request-scoped handler for user operations.

    Args:
        db: Session acting as the unit of work for the request.
        images: Storage used for profile photos.
        settings: Application settings.
        read_sessions: Factory for extra sessions used to run independent reads
            concurrently. When ``None`` those reads run one after the other on
            ``db``.
    """

    def __init__(
        self,
        db: Session,
        images: ImageService,
        settings: Settings,
        read_sessions: Callable[[], Session] | None = None,
    ) -> None:
        self.db = db
        self.images = images
        self.settings = settings
        self.read_sessions = read_sessions
        self.threads = ThreadRepository(db)

    def _require_user(self, user_id: str) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def _run_reads(self, *statements: Select) -> list[Sequence[Row]]:
        """Execute independent read statements, concurrently when possible."""
        if self.read_sessions is None:
            return [self.threads.summaries(stmt) for stmt in statements]

        factory = self.read_sessions

        def run(stmt: Select) -> Sequence[Row]:
            with factory() as session:
                return session.execute(stmt).all()

        results = await asyncio.gather(*(asyncio.to_thread(run, stmt) for stmt in statements))
        return list(results)

    async def list_users(self, query: ListUsersQuery) -> list[UserDTO]:
        """Return one page of users matching the search term, ordered by name.

        The requesting user (``query.user_id``) never appears in the results.
        """
        logger.info("List users - query: %s", query.model_dump())

        stmt = select(User)
        if query.user_id:
            stmt = stmt.where(User.id != query.user_id)
        if query.search_term:
            term = query.search_term.lower()
            stmt = stmt.where(
                or_(
                    func.lower(User.name).contains(term, autoescape=True),
                    func.lower(User.username).contains(term, autoescape=True),
                )
            )
        stmt = stmt.order_by(User.name).offset(query.offset).limit(query.take)
        return [to_user_dto(user) for user in self.db.execute(stmt).scalars()]

    async def get_user(self, user_id: str) -> UserDTO:
        """Return a single user by identifier."""
        return to_user_dto(self._require_user(user_id))

    async def update_user(
        self,
        user_id: str,
        data: UserUpdate,
        profile_photo: UploadFile | None = None,
    ) -> UserDTO:
        """Create or update a user profile in one transaction.

        Unset fields default to empty strings on creation and keep their stored
        values on update. A supplied photo is uploaded before the transaction
        commits; if anything fails afterwards the transaction is rolled back and
        the new upload deleted. The replaced photo is only removed once the new
        state has been committed.

        Raises:
            ConflictError: If the requested username belongs to another user.
        """
        logger.info(
            "Update user - user_id: %s data: %s photo: %s",
            user_id,
            data.model_dump(exclude_none=True),
            profile_photo.filename if profile_photo is not None else None,
        )

        uploaded: str | None = None
        replaced_photo: str | None = None
        try:
            user = self.db.get(User, user_id)

            if data.username:
                taken = self.db.execute(
                    select(User.id).where(User.username == data.username, User.id != user_id)
                ).first()
                if taken is not None:
                    raise ConflictError("Username already taken")

            photo_url: str | None = None
            if profile_photo is not None:
                uploaded = await self.images.upload_file(profile_photo)
                photo_url = self.images.public_url(uploaded)

            if user is None:
                user = User(
                    id=user_id,
                    name=data.name if data.name is not None else "",
                    username=data.username if data.username is not None else "",
                    bio=data.bio if data.bio is not None else "",
                    profile_photo=photo_url if photo_url is not None else "",
                    onboarded=True,
                )
                self.db.add(user)
            else:
                if data.name is not None:
                    user.name = data.name
                if data.username is not None:
                    user.username = data.username
                if data.bio is not None:
                    user.bio = data.bio
                if photo_url is not None:
                    replaced_photo = user.profile_photo
                    user.profile_photo = photo_url
                user.onboarded = True

            self.db.commit()
        except Exception:
            self.db.rollback()
            if uploaded:
                self.images.delete_image(uploaded)
            logger.warning("Update user %s rolled back", user_id)
            raise

        if replaced_photo:
            self.images.delete_image(replaced_photo)

        self.db.refresh(user)
        return to_user_dto(user)

    async def get_user_activity(self, user_id: str) -> list[ThreadDTO]:
        """Return comments other users left on the user's threads, newest first.

        Self-replies are excluded: the filter is on the comment's author, not on
        the owner of the thread being answered.
        """
        logger.info("Get user activity - user_id: %s", user_id)

        user_threads = self.threads.list_authored_with_comments(user_id)
        comments = [
            comment
            for thread in user_threads
            for comment in thread.comments
            if comment.author_id != user_id
        ]
        comments.sort(key=lambda comment: comment.created_at, reverse=True)
        return [to_thread_dto(comment) for comment in comments]

    async def get_user_profile(self, user_id: str) -> UserProfileResponse:
        """Return the user with their top-level threads and their replies.

        Both thread lists are independent projections and are fetched
        concurrently when a read session factory is configured.
        """
        logger.info("Get user profile - user_id: %s", user_id)

        user = self._require_user(user_id)
        thread_rows, reply_rows = await self._run_reads(
            ThreadRepository.top_level_by_author(user_id),
            ThreadRepository.replies_by_author(user_id),
        )
        return UserProfileResponse(
            profile=to_user_dto(user),
            threads=[thread_row_to_dto(row) for row in thread_rows],
            replies=[thread_row_to_dto(row) for row in reply_rows],
        )

    async def get_suggest_users(self, query: SuggestQuery) -> list[UserDTO]:
        """Return a uniform random sample of users."""
        logger.info("Get suggest users - query: %s", query.model_dump())

        count = query.count if query.count is not None else self.settings.default_suggest_count
        if count == 0:
            return []

        stmt = select(User).order_by(func.random()).limit(count)
        return [to_user_dto(user) for user in self.db.execute(stmt).scalars()]
