# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("PARALLEL_PROFILE_READS", "false")

from threads_backend.api.v1.dependencies import get_image_service, get_read_sessions
from threads_backend.core.settings import Settings
from threads_backend.db.session import Base, enable_sqlite_foreign_keys
from threads_backend.db.session import get_db as app_get_session
from threads_backend.main import app as fastapi_app
from threads_backend.models import Community, CommunityMember, Thread, User
from threads_backend.services.images import ImageService

TEST_DB_URL = "sqlite://"

_THREAD_CLOCK = count(1)
_BASE_TIME = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture()
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing image storage at a per-test directory."""
    return Settings(
        IMAGE_STORAGE_DIR=str(tmp_path / "images"),
        IMAGE_BASE_URL="http://test/api/v1/images/",
        PARALLEL_PROFILE_READS=False,
    )


@pytest.fixture()
def image_service(test_settings: Settings) -> ImageService:
    return ImageService(test_settings)


@pytest.fixture()
def image_dir(test_settings: Settings) -> Path:
    return Path(test_settings.image_storage_dir)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    image_service: ImageService,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_image_service] = lambda: image_service
    app.dependency_overrides[get_read_sessions] = lambda: None
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_image_service, None)
        app.dependency_overrides.pop(get_read_sessions, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory persisting onboarded users."""

    def _make_user(user_id: str, name: str | None = None, username: str | None = None) -> User:
        user = User(
            id=user_id,
            name=name or user_id.title(),
            username=username or user_id,
            bio="",
            profile_photo="",
            onboarded=True,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return the primary test user."""
    return make_user("user_alice", name="Alice Liddell", username="alice")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second persisted user."""
    return make_user("user_bob", name="Bob Builder", username="bob")


@pytest.fixture()
def community(db_session: Session, test_user: User) -> Community:
    """Create a community owned by the primary test user, who is also a member."""
    community = Community(
        id="org_readers",
        username="readers",
        name="Readers Club",
        bio="Books and more books",
        image="",
        created_by_id=test_user.id,
    )
    community.members.append(CommunityMember(member_id=test_user.id))
    db_session.add(community)
    db_session.commit()
    return community


@pytest.fixture()
def make_thread(db_session: Session) -> Callable[..., Thread]:
    """Return a factory persisting threads with strictly increasing timestamps."""

    def _make_thread(
        author: User,
        text: str = "Hello threads",
        *,
        community: Community | None = None,
        parent: Thread | None = None,
    ) -> Thread:
        created_at = _BASE_TIME + timedelta(minutes=next(_THREAD_CLOCK))
        thread = Thread(
            text=text,
            author_id=author.id,
            community_id=community.id if community is not None else None,
            parent_thread_id=parent.id if parent is not None else None,
            created_at=created_at,
            updated_at=created_at,
        )
        db_session.add(thread)
        db_session.commit()
        return thread

    return _make_thread
