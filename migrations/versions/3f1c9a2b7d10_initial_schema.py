"""initial schema

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-10-18 09:12:41.402117

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3f1c9a2b7d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Create users, communities, community_members and threads."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("bio", sa.Text(), nullable=False),
        sa.Column("profile_photo", sa.Text(), nullable=False),
        sa.Column("onboarded", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "uq_users_username",
        "users",
        ["username"],
        unique=True,
        sqlite_where=sa.text("username != ''"),
        postgresql_where=sa.text("username != ''"),
    )
    op.create_table(
        "communities",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("bio", sa.Text(), nullable=False),
        sa.Column("image", sa.Text(), nullable=False),
        sa.Column("created_by_id", sa.String(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["created_by_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )
    op.create_index(
        op.f("ix_communities_created_by_id"), "communities", ["created_by_id"], unique=False
    )
    op.create_table(
        "community_members",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("community_id", sa.String(), nullable=False),
        sa.Column("member_id", sa.String(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["community_id"], ["communities.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["member_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("community_id", "member_id", name="uq_community_members_pair"),
    )
    op.create_index(
        op.f("ix_community_members_community_id"),
        "community_members",
        ["community_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_community_members_member_id"), "community_members", ["member_id"], unique=False
    )
    op.create_table(
        "threads",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("author_id", sa.String(), nullable=False),
        sa.Column("community_id", sa.String(), nullable=True),
        sa.Column("parent_thread_id", sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["community_id"], ["communities.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["parent_thread_id"], ["threads.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_threads_author_id"), "threads", ["author_id"], unique=False)
    op.create_index(op.f("ix_threads_community_id"), "threads", ["community_id"], unique=False)
    op.create_index(
        op.f("ix_threads_parent_thread_id"), "threads", ["parent_thread_id"], unique=False
    )


def downgrade() -> None:
    """Drop every table created by this revision."""
    op.drop_index(op.f("ix_threads_parent_thread_id"), table_name="threads")
    op.drop_index(op.f("ix_threads_community_id"), table_name="threads")
    op.drop_index(op.f("ix_threads_author_id"), table_name="threads")
    op.drop_table("threads")
    op.drop_index(op.f("ix_community_members_member_id"), table_name="community_members")
    op.drop_index(op.f("ix_community_members_community_id"), table_name="community_members")
    op.drop_table("community_members")
    op.drop_index(op.f("ix_communities_created_by_id"), table_name="communities")
    op.drop_table("communities")
    op.drop_index("uq_users_username", table_name="users")
    op.drop_table("users")
