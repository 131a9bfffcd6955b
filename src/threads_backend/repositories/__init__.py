"""Data access helpers layered over the SQLAlchemy session."""

from .thread_repo import ThreadRepository, thread_summary_select

__all__ = ["ThreadRepository", "thread_summary_select"]
