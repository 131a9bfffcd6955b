"""SQLAlchemy model for threads and their comments."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from threads_backend.db.session import Base
from threads_backend.db.time import utcnow

if TYPE_CHECKING:
    from .community import Community
    from .user import User


class Thread(Base):
    """A post or a comment.

    Top-level posts have ``parent_thread_id = NULL``; comments point at the
    thread they answer. The tree lives in this flat table and is walked with
    ``parent_thread_id`` filters.
    """

    __tablename__ = "threads"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    community_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("communities.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    parent_thread_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("threads.id"),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    author: Mapped[User] = relationship("User", back_populates="threads")
    community: Mapped[Community | None] = relationship("Community", back_populates="threads")
    parent: Mapped[Thread | None] = relationship(
        "Thread",
        remote_side=[id],
        back_populates="comments",
    )
    comments: Mapped[list[Thread]] = relationship(
        "Thread",
        back_populates="parent",
        order_by="Thread.created_at",
    )
