"""Pytest configuration.

Settings are read from the environment at import time, so minimal test
defaults are set here before the application package is imported.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ["AUTO_CREATE_TABLES"] = "false"
# pydantic-settings parses List[str] from env as JSON
os.environ["CORS_ORIGINS"] = '["*"]'

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from admissions_console.core.auth import StaticIdentity
from admissions_console.core.database import Base, get_db
from admissions_console.core.notifications import CollectingNotifier
from admissions_console.core.security import create_access_token
from admissions_console.main import app
from admissions_console.models.user import UserProfile


@pytest.fixture()
def db():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def _create_user(db, email: str, role: str) -> UserProfile:
    user = UserProfile(email=email, first_name="Test", last_name=role.title(), role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def admin_user(db):
    return _create_user(db, "admin@example.com", "admin")


@pytest.fixture()
def advisor_user(db):
    return _create_user(db, "advisor@example.com", "advisor")


@pytest.fixture()
def notifier():
    return CollectingNotifier()


@pytest.fixture()
def identity(admin_user):
    return StaticIdentity(admin_user)


def auth_headers(user: UserProfile) -> dict:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def client(db):
    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
def admin_headers(admin_user):
    return auth_headers(admin_user)


@pytest.fixture()
def advisor_headers(advisor_user):
    return auth_headers(advisor_user)
