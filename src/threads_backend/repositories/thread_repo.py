"""Data access helpers for working with threads."""
from __future__ import annotations

import uuid
from collections.abc import Sequence

from sqlalchemy import Row, Select, func, select
from sqlalchemy.orm import Session, aliased, selectinload

from threads_backend.models import Community, Thread, User

__all__ = ["ThreadRepository", "thread_summary_select"]


def thread_summary_select() -> Select:
    """Return a flat projection of threads with author, community and comment count.

    Rows carry only the columns the thread DTO needs, so no ORM objects are
    materialized.
    """
    comment = aliased(Thread)
    comments_count = (
        select(func.count(comment.id))
        .where(comment.parent_thread_id == Thread.id)
        .correlate(Thread)
        .scalar_subquery()
    )
    return (
        select(
            Thread.id,
            Thread.text,
            Thread.author_id,
            Thread.parent_thread_id,
            Thread.community_id,
            Thread.created_at,
            User.name.label("author_name"),
            User.username.label("author_username"),
            User.profile_photo.label("author_profile_photo"),
            Community.name.label("community_name"),
            Community.username.label("community_username"),
            Community.image.label("community_image"),
            Community.created_at.label("community_created_at"),
            comments_count.label("comments_count"),
        )
        .join(User, User.id == Thread.author_id)
        .outerjoin(Community, Community.id == Thread.community_id)
    )


class ThreadRepository:
    """Thin wrapper around database access for thread entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    @staticmethod
    def top_level_by_author(user_id: str) -> Select:
        """Projection of the user's own posts, newest first."""
        return (
            thread_summary_select()
            .where(Thread.author_id == user_id, Thread.parent_thread_id.is_(None))
            .order_by(Thread.created_at.desc())
        )

    @staticmethod
    def replies_by_author(user_id: str) -> Select:
        """Projection of the comments the user wrote, newest first."""
        return (
            thread_summary_select()
            .where(Thread.author_id == user_id, Thread.parent_thread_id.is_not(None))
            .order_by(Thread.created_at.desc())
        )

    @staticmethod
    def top_level_in_community(community_id: str) -> Select:
        """Projection of a community's top-level threads, newest first."""
        return (
            thread_summary_select()
            .where(Thread.community_id == community_id, Thread.parent_thread_id.is_(None))
            .order_by(Thread.created_at.desc())
        )

    def summaries(self, stmt: Select) -> Sequence[Row]:
        """Execute a summary projection on this repository's session."""
        return self.session.execute(stmt).all()

    def list_top_level(self, offset: int, limit: int) -> Sequence[Row]:
        """Return one page of top-level threads, newest first."""
        stmt = (
            thread_summary_select()
            .where(Thread.parent_thread_id.is_(None))
            .order_by(Thread.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return self.summaries(stmt)

    def get_by_id(self, thread_id: uuid.UUID) -> Thread | None:
        """Return a thread by identifier."""
        return self.session.get(Thread, thread_id)

    def get_with_comments(self, thread_id: uuid.UUID) -> Thread | None:
        """Return a thread with author, community and direct comments loaded."""
        stmt = (
            select(Thread)
            .where(Thread.id == thread_id)
            .options(*self._comment_tree_options())
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalars().first()

    def list_with_comments(self, *criteria) -> list[Thread]:
        """Return top-level threads matching ``criteria`` with direct comments loaded."""
        stmt = (
            select(Thread)
            .where(Thread.parent_thread_id.is_(None), *criteria)
            .options(*self._comment_tree_options())
            .execution_options(populate_existing=True)
            .order_by(Thread.created_at.desc())
        )
        return list(self.session.execute(stmt).scalars())

    def list_authored_with_comments(self, user_id: str) -> list[Thread]:
        """Return every thread the user wrote with comments and their authors loaded."""
        stmt = (
            select(Thread)
            .where(Thread.author_id == user_id)
            .options(*self._comment_tree_options())
            .execution_options(populate_existing=True)
        )
        return list(self.session.execute(stmt).scalars())

    @staticmethod
    def _comment_tree_options() -> tuple:
        # Comments of comments are loaded only to count them.
        return (
            selectinload(Thread.author),
            selectinload(Thread.community),
            selectinload(Thread.comments).options(
                selectinload(Thread.author),
                selectinload(Thread.community),
                selectinload(Thread.comments),
            ),
        )

    def create(
        self,
        *,
        text: str,
        author_id: str,
        community_id: str | None = None,
        parent_thread_id: uuid.UUID | None = None,
    ) -> Thread:
        """Insert a new thread and return the flushed ORM instance."""
        thread = Thread(
            text=text,
            author_id=author_id,
            community_id=community_id,
            parent_thread_id=parent_thread_id,
        )
        self.session.add(thread)
        self.session.flush()
        return thread
