"""Versioned API router wiring for v1.

This module composes the version 1 API surface by including the sub-routers
that define their own endpoints. It contains no business logic and no endpoint
definitions.
"""
from __future__ import annotations

from typing import Final

from fastapi import APIRouter

from .endpoints import communities_router, images_router, threads_router, users_router

api_v1: Final[APIRouter] = APIRouter()
api_v1.include_router(users_router)
api_v1.include_router(communities_router)
api_v1.include_router(threads_router)
api_v1.include_router(images_router)

__all__ = ["api_v1"]
