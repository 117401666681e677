"""Pytest configuration.

Settings are read from the environment when `cms.core.config` is imported,
so the test database and secrets are set here before importing the app.
Each test gets freshly created tables in a throwaway SQLite file.
"""

import os
import tempfile

_tmp_dir = tempfile.mkdtemp(prefix="cms-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_tmp_dir}/test.db"
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ["SEED_DEFAULT_SETTINGS"] = "0"
os.environ["SEED_SECRET"] = "seed-test-secret"

import pytest
from fastapi.testclient import TestClient

from cms.core.security import create_access_token, hash_password
from cms.db.base import Base
from cms.db.session import engine, SessionLocal
from cms.main import app
from cms.models.models import User

PASSWORD = "secret-pass-1"
_password_hash = None


def _hash() -> str:
    # bcrypt yavaş; tüm test kullanıcıları aynı hash'i paylaşır
    global _password_hash
    if _password_hash is None:
        _password_hash = hash_password(PASSWORD)
    return _password_hash


@pytest.fixture(autouse=True)
def _fresh_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    # context manager olmadan: startup seed çalışmaz
    return TestClient(app)


@pytest.fixture
def make_user(db):
    def _make(email: str, role: str = "viewer", is_active: bool = True, name: str | None = None) -> User:
        u = User(email=email, name=name or email.split("@")[0], password_hash=_hash(), role=role, is_active=is_active)
        db.add(u)
        db.commit()
        db.refresh(u)
        return u
    return _make


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(sub=user.email, role=user.role)}"}


@pytest.fixture
def admin(make_user):
    return make_user("admin@acme.com", role="admin")


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)
