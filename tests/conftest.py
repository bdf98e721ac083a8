"""Pytest configuration and fixtures."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import devcircle.models  # noqa: F401
from devcircle.db.base import Base, get_db, enable_sqlite_foreign_keys
from devcircle.models import User, Profile
from devcircle.services.auth import hash_password
from main import app


@pytest.fixture
def session_factory():
    """테스트마다 새 인메모리 SQLite (외래 키 검사 켬)"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    yield TestingSessionLocal

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session_factory):
    """사용자 + 빈 프로필을 직접 만들고 id 를 반환"""
    def _make_user(username="dev", email=None, password=None):
        with session_factory() as db:
            user = User(
                username=username,
                email=email or f"{username}@devcircle.io",
                password=hash_password(password) if password else None,
                profile=Profile(onboarding_completed=False),
            )
            db.add(user)
            db.commit()
            return user.id
    return _make_user


@pytest.fixture
def make_post(client):
    def _make_post(author_id, title="hello", tags=(), **fields):
        payload = {"author_id": author_id, "title": title, "tags": list(tags), **fields}
        response = client.post("/api/post/", json=payload)
        assert response.status_code == 200, response.text
        return response.json()
    return _make_post


@pytest.fixture
def make_group(client):
    def _make_group(creator_id, name="Rustaceans", bio="We write Rust", members=()):
        payload = {
            "name": name,
            "bio": bio,
            "creator_id": creator_id,
            "members": [{"user_id": m} for m in members],
        }
        response = client.post("/api/group/create", json=payload)
        assert response.status_code == 200, response.text
        return response.json()
    return _make_group
