"""SQLAlchemy model for user profiles."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from threads_backend.db.session import Base
from threads_backend.db.time import utcnow

if TYPE_CHECKING:
    from .community import CommunityMember
    from .thread import Thread


class User(Base):
    """Profile keyed by the identifier issued by the external identity provider."""

    __tablename__ = "users"
    # Handles are unique once chosen; users who have not picked one share "".
    __table_args__ = (
        Index(
            "uq_users_username",
            "username",
            unique=True,
            sqlite_where=text("username != ''"),
            postgresql_where=text("username != ''"),
        ),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, default="")
    username: Mapped[str] = mapped_column(Text, nullable=False, default="")
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    profile_photo: Mapped[str] = mapped_column(Text, nullable=False, default="")
    onboarded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    threads: Mapped[list[Thread]] = relationship(
        "Thread",
        back_populates="author",
        passive_deletes="all",
    )
    memberships: Mapped[list[CommunityMember]] = relationship(
        "CommunityMember",
        back_populates="member",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
