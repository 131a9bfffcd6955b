"""SQLAlchemy models for communities and their membership."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from threads_backend.db.session import Base
from threads_backend.db.time import utcnow

if TYPE_CHECKING:
    from .thread import Thread
    from .user import User


def _new_member_id() -> str:
    return uuid.uuid4().hex


class Community(Base):
    """A named group that owns threads and has members."""

    __tablename__ = "communities"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    # Public handle, unique across communities.
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_by_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    created_by: Mapped[User] = relationship("User")
    members: Mapped[list[CommunityMember]] = relationship(
        "CommunityMember",
        back_populates="community",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    threads: Mapped[list[Thread]] = relationship(
        "Thread",
        back_populates="community",
        passive_deletes="all",
    )


class CommunityMember(Base):
    """Join table mapping users into communities."""

    __tablename__ = "community_members"
    __table_args__ = (
        UniqueConstraint("community_id", "member_id", name="uq_community_members_pair"),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True, default=_new_member_id)
    community_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("communities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    member_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    community: Mapped[Community] = relationship("Community", back_populates="members")
    member: Mapped[User] = relationship("User", back_populates="memberships")
