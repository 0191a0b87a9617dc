# tests/conftest.py
"""Shared fixtures: an in-memory database, seeded categories and an HTTP client."""

import os
import tempfile

# Point the app at throwaway storage before anything imports the settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("UPLOAD_DIRECTORY", tempfile.mkdtemp(prefix="forum-uploads-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.db.session import Base, get_db
import app.db.base  # noqa: F401
from app.main import app
from app.modules.auth.services.auth import register_user
from app.modules.categories.services.category import get_category, seed_categories
from app.modules.user_management.schemas.user import UserCreate


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = TestingSessionLocal()
    seed_categories(session, settings.DEFAULT_CATEGORIES)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Register users on demand: make_user("alice") -> SessionInfo"""
    def _make_user(username: str, password: str = "pw"):
        return register_user(
            db, UserCreate(email=f"{username}@example.com", username=username, password=password)
        )
    return _make_user


@pytest.fixture
def comedy(db):
    return get_category(db, "Comedy")
