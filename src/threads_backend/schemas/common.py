"""Shared Pydantic schemas for list and suggestion queries."""
from __future__ import annotations

from pydantic import BaseModel, Field


class PageQuery(BaseModel):
    """Skip/take pagination where ``skip`` counts pages of ``take`` rows."""

    search_term: str | None = Field(None, description="Case-insensitive substring filter")
    skip: int = Field(0, ge=0, description="Zero-based page index")
    take: int = Field(20, ge=1, le=100, description="Page size")

    @property
    def offset(self) -> int:
        """Return the row offset of the requested page."""
        return self.skip * self.take


class SuggestQuery(BaseModel):
    """Number of random rows to suggest."""

    count: int | None = Field(None, ge=0, le=50, description="Defaults to the configured count")
