import os

# settings are read at import time, point them at sqlite before the app loads
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.api.deps import get_db
from app.db.base import Base
from app.models import User, UserRole
from app.utils.auth_helper import build_token_claims, create_access_token, hash_password

# In-memory SQLite so every test is fast and isolated
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_EMAIL = "admin@example.com"
USER_EMAIL = "clerk@example.com"
PASSWORD = "Str0ng!Pass"


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def client():
    """Fresh client per test so cookie jars never leak between tests"""
    return TestClient(app)


@pytest.fixture(scope="function")
def test_db():
    """Create the tables before each test and drop them afterwards"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()

    yield db

    db.close()
    Base.metadata.drop_all(bind=engine)


def _make_user(db, email, role, **extra):
    user = User(
        email=email,
        hashed_password=hash_password(PASSWORD),
        name=extra.pop("name", "Test User"),
        role=role,
        **extra,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_user(test_db):
    return _make_user(test_db, ADMIN_EMAIL, UserRole.ADMIN, name="Admin")


@pytest.fixture
def regular_user(test_db):
    return _make_user(test_db, USER_EMAIL, UserRole.USER, name="Clerk", permissions=["read:branches"])


@pytest.fixture
def inactive_user(test_db):
    return _make_user(test_db, "gone@example.com", UserRole.USER, is_active=False)


def auth_headers(user):
    token = create_access_token(build_token_claims(user))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user):
    return auth_headers(admin_user)


@pytest.fixture
def user_headers(regular_user):
    return auth_headers(regular_user)
