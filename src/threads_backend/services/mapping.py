"""Conversions from ORM entities and projected rows to API schemas."""
from __future__ import annotations

from sqlalchemy import Row

from threads_backend.models import Community, Thread, User
from threads_backend.schemas.community import CommunityDTO
from threads_backend.schemas.thread import ThreadDTO
from threads_backend.schemas.user import UserDTO


def to_user_dto(user: User) -> UserDTO:
    """Convert a User ORM instance to an API schema."""
    return UserDTO.model_validate(user)


def to_community_dto(community: Community, members_count: int | None = None) -> CommunityDTO:
    """Convert a Community ORM instance to an API schema."""
    return CommunityDTO(
        id=community.id,
        name=community.name,
        username=community.username,
        image=community.image,
        bio=community.bio,
        created_by_id=community.created_by_id,
        created_at=community.created_at,
        members_count=members_count,
    )


def to_thread_dto(thread: Thread, *, with_comments: bool = False) -> ThreadDTO:
    """Convert a Thread whose author, community and comments are loaded.

    With ``with_comments`` the direct comments are embedded one level deep.
    """
    comments = [to_thread_dto(comment) for comment in thread.comments] if with_comments else []
    return ThreadDTO(
        id=thread.id,
        text=thread.text,
        author_id=thread.author_id,
        author=to_user_dto(thread.author),
        parent_thread_id=thread.parent_thread_id,
        community_id=thread.community_id,
        community=to_community_dto(thread.community) if thread.community is not None else None,
        comments_count=len(thread.comments),
        comments=comments,
        created_at=thread.created_at,
    )


def thread_row_to_dto(row: Row) -> ThreadDTO:
    """Build a thread schema from a ``thread_summary_select`` row."""
    community = None
    if row.community_id is not None:
        community = CommunityDTO(
            id=row.community_id,
            name=row.community_name,
            username=row.community_username,
            image=row.community_image,
            created_at=row.community_created_at,
        )
    return ThreadDTO(
        id=row.id,
        text=row.text,
        author_id=row.author_id,
        author=UserDTO(
            id=row.author_id,
            name=row.author_name,
            username=row.author_username,
            profile_photo=row.author_profile_photo,
        ),
        parent_thread_id=row.parent_thread_id,
        community_id=row.community_id,
        community=community,
        comments_count=int(row.comments_count or 0),
        created_at=row.created_at,
    )
