# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import timedelta
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from plume.core.security import create_access_token
from plume.db.session import Base
from plume.db.session import get_db as app_get_session
from plume.db.time import utcnow
from plume.main import app as fastapi_app
from plume.models import Category, Post, User

TEST_DB_URL = "sqlite://"

_USER_COUNTER = count(1)
_POST_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
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

        # Services commit, so wipe every table to give each test a clean database.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    def _make(*, is_admin: bool = False, name: str | None = None) -> User:
        index = next(_USER_COUNTER)
        user = User(
            name=name or f"user{index}",
            email=f"user{index}@example.com",
            is_admin=is_admin,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture()
def reader(make_user: Callable[..., User]) -> User:
    return make_user(name="Reader")


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    return make_user(is_admin=True, name="Editor")


def bearer(user: User) -> dict[str, str]:
    """Authorization header for ``user``."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def auth_headers() -> Callable[[User], dict[str, str]]:
    return bearer


@pytest.fixture()
def reader_headers(reader: User) -> dict[str, str]:
    return bearer(reader)


@pytest.fixture()
def admin_headers(admin_user: User) -> dict[str, str]:
    return bearer(admin_user)


@pytest.fixture()
def category(db_session: Session) -> Category:
    category = Category(name="Voyages", slug="voyages", description="Travel notes")
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture()
def make_post(db_session: Session, admin_user: User, category: Category) -> Callable[..., Post]:
    def _make(
        *,
        status: str = "published",
        published_ago: timedelta | None = timedelta(hours=1),
        category_id: int | None = None,
        title: str | None = None,
    ) -> Post:
        index = next(_POST_COUNTER)
        published_at = None
        if status == "published" and published_ago is not None:
            published_at = utcnow() - published_ago
        post = Post(
            user_id=admin_user.id,
            category_id=category_id or category.id,
            title=title or f"Post {index}",
            slug=f"post-{index}",
            content=f"Body of post {index}",
            status=status,
            published_at=published_at,
            views_count=0,
        )
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make


@pytest.fixture()
def published_post(make_post: Callable[..., Post]) -> Post:
    return make_post()


@pytest.fixture()
def draft_post(make_post: Callable[..., Post]) -> Post:
    return make_post(status="draft")
