import os
from dataclasses import dataclass

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from adboard.core.rate_limiter import rate_limiter
from adboard.database import Base, get_db
from adboard.dependencies import get_current_admin, get_current_user
from adboard.main import app
from adboard.models import Listing, User  # noqa: F401
from adboard.repos import user_repo


@dataclass
class StubUser:
    id: str = "user-1"
    email: str = "user@example.com"
    is_admin: bool = False
    is_active: bool = True
    password_hash: str = "hashed-password"


def listing_payload(**overrides) -> dict:
    payload = {
        "title": "Backend Developer",
        "description": "Build and maintain REST APIs for our platform.",
        "category": "job",
        "city": "Bakı",
        "experienceLevel": "mid",
        "salary": "2000 AZN",
        "contactEmail": "hr@example.az",
        "contactPhone": "+994 50 123 45 67",
    }
    payload.update(overrides)
    return payload


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    rate_limiter.reset()
    yield
    rate_limiter.reset()


@pytest.fixture
def stub_user() -> StubUser:
    return StubUser()


@pytest.fixture
def admin_user() -> StubUser:
    return StubUser(id="admin-1", email="admin@example.com", is_admin=True)


@pytest.fixture
def client(stub_user: StubUser):
    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_user] = lambda: stub_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(admin_user: StubUser):
    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_user] = lambda: admin_user
    app.dependency_overrides[get_current_admin] = lambda: admin_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client():
    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---- Real SQLite store ----
@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def owner(db):
    return user_repo.create(db, "owner@example.com", "owner-password")


@pytest.fixture
def stranger(db):
    return user_repo.create(db, "stranger@example.com", "stranger-password")


@pytest.fixture
def admin(db):
    user = user_repo.create(db, "moderator@example.com", "admin-password")
    return user_repo.update(db, user.id, is_admin=True)


@pytest.fixture
def api_client(session_factory):
    """TestClient backed by the SQLite store, with real bearer-token auth."""

    def _db_override():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _db_override
    yield TestClient(app)
    app.dependency_overrides.clear()
