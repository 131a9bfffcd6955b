"""Shared API dependencies wiring sessions, settings and services."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session, sessionmaker

from threads_backend.core.settings import Settings, settings
from threads_backend.db.session import SessionLocal, get_db
from threads_backend.services.community_service import CommunityService
from threads_backend.services.images import ImageService
from threads_backend.services.thread_service import ThreadService
from threads_backend.services.user_service import UserService

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_settings() -> Settings:
    """Return the process-wide settings."""
    return settings


SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_image_service(app_settings: SettingsDep) -> ImageService:
    """Return an image store configured from settings."""
    return ImageService(app_settings)


def get_read_sessions(app_settings: SettingsDep) -> sessionmaker[Session] | None:
    """Return the session factory used for concurrent reads, if enabled."""
    if app_settings.parallel_profile_reads:
        return SessionLocal
    return None


ImageServiceDep = Annotated[ImageService, Depends(get_image_service)]
ReadSessionsDep = Annotated[sessionmaker[Session] | None, Depends(get_read_sessions)]


def get_user_service(
    db: SessionDep,
    images: ImageServiceDep,
    app_settings: SettingsDep,
    read_sessions: ReadSessionsDep,
) -> UserService:
    """Build the user service for the current request."""
    return UserService(db, images, app_settings, read_sessions=read_sessions)


def get_community_service(db: SessionDep, app_settings: SettingsDep) -> CommunityService:
    """Build the community service for the current request."""
    return CommunityService(db, app_settings)


def get_thread_service(db: SessionDep) -> ThreadService:
    """Build the thread service for the current request."""
    return ThreadService(db)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
CommunityServiceDep = Annotated[CommunityService, Depends(get_community_service)]
ThreadServiceDep = Annotated[ThreadService, Depends(get_thread_service)]
