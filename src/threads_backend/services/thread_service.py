"""Posting, commenting and thread retrieval."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy.orm import Session

from threads_backend.core.errors import NotFoundError
from threads_backend.models import Community, Thread, User
from threads_backend.repositories import ThreadRepository
from threads_backend.schemas.thread import (
    CommentCreate,
    CommunityThreadsResponse,
    ListThreadsQuery,
    ThreadCreate,
    ThreadDTO,
    UserThreadsResponse,
)
from threads_backend.services.mapping import (
    thread_row_to_dto,
    to_community_dto,
    to_thread_dto,
    to_user_dto,
)

logger = logging.getLogger(__name__)

__all__ = ["ThreadService"]


class ThreadService:
    """Request-scoped handler for thread operations."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.threads = ThreadRepository(db)

    def _require_user(self, user_id: str) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _require_community(self, community_id: str) -> Community:
        community = self.db.get(Community, community_id)
        if community is None:
            raise NotFoundError("Community not found")
        return community

    def _load(self, thread_id: uuid.UUID) -> ThreadDTO:
        thread = self.threads.get_with_comments(thread_id)
        if thread is None:
            raise NotFoundError("Thread not found")
        return to_thread_dto(thread, with_comments=True)

    def _persist(self, **fields) -> Thread:
        try:
            thread = self.threads.create(**fields)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return thread

    async def create_thread(self, data: ThreadCreate) -> ThreadDTO:
        """Create a top-level thread.

        Raises:
            NotFoundError: If the author or the community does not exist.
        """
        logger.info("Create thread - author_id: %s community_id: %s", data.author_id, data.community_id)

        self._require_user(data.author_id)
        if data.community_id is not None:
            self._require_community(data.community_id)

        thread = self._persist(
            text=data.text,
            author_id=data.author_id,
            community_id=data.community_id,
        )
        return self._load(thread.id)

    async def list_threads(self, query: ListThreadsQuery) -> list[ThreadDTO]:
        """Return one page of top-level threads, newest first."""
        logger.info("List threads - query: %s", query.model_dump())

        rows = self.threads.list_top_level(query.offset, query.take)
        return [thread_row_to_dto(row) for row in rows]

    async def get_thread(self, thread_id: uuid.UUID) -> ThreadDTO:
        """Return a thread with its direct comments."""
        return self._load(thread_id)

    async def get_user_threads(self, user_id: str) -> UserThreadsResponse:
        """Return a user with their top-level threads and each thread's comments."""
        logger.info("Get user threads - user_id: %s", user_id)

        user = self._require_user(user_id)
        threads = self.threads.list_with_comments(Thread.author_id == user_id)
        return UserThreadsResponse(
            user=to_user_dto(user),
            threads=[to_thread_dto(thread, with_comments=True) for thread in threads],
        )

    async def get_community_threads(self, community_id: str) -> CommunityThreadsResponse:
        """Return a community with its top-level threads and each thread's comments."""
        logger.info("Get community threads - community_id: %s", community_id)

        community = self._require_community(community_id)
        threads = self.threads.list_with_comments(Thread.community_id == community_id)
        return CommunityThreadsResponse(
            community=to_community_dto(community),
            threads=[to_thread_dto(thread, with_comments=True) for thread in threads],
        )

    async def add_comment_to_thread(self, data: CommentCreate) -> ThreadDTO:
        """Answer an existing thread.

        The comment joins the parent's community, if any.

        Raises:
            NotFoundError: If the parent thread or the author does not exist.
        """
        logger.info("Add comment - thread_id: %s author_id: %s", data.thread_id, data.author_id)

        parent = self.threads.get_by_id(data.thread_id)
        if parent is None:
            raise NotFoundError("Thread not found")
        self._require_user(data.author_id)

        comment = self._persist(
            text=data.text,
            author_id=data.author_id,
            community_id=parent.community_id,
            parent_thread_id=parent.id,
        )
        return self._load(comment.id)
