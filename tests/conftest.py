# File: tests/conftest.py

"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database. API tests swap the
application's ``get_db`` dependency for a session bound to that database,
so nothing touches the configured DATABASE_URL.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from collections.abc import Callable, Iterator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.db.init_db import init_db  # noqa: E402
from app.db.session import build_engine, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.item import Item  # noqa: E402
from app.models.roadmap import Roadmap  # noqa: E402
from app.repositories.user import UserRepository  # noqa: E402
from app.services.locks import RoadmapLocks  # noqa: E402

PASSWORD = "secret123"


def register_payload(username: str, *, email: str | None = None, password: str = PASSWORD) -> dict:
    return {"username": username, "email": email or f"{username}@example.com", "password": password}


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def locks() -> RoadmapLocks:
    return RoadmapLocks()


@pytest.fixture
def make_user(db) -> Callable[..., int]:
    """Insert a user directly and return its id."""

    def _make_user(username: str) -> int:
        user = UserRepository(db).create(username, f"{username}@example.com", "not-a-real-hash")
        db.commit()
        return user.id

    return _make_user


@pytest.fixture
def make_roadmap(db) -> Callable[..., Roadmap]:
    """Insert a roadmap with items at positions 1..N, in the given order."""

    def _make_roadmap(owner_id: int, name: str, titles=(), category: str = "Dev") -> Roadmap:
        roadmap = Roadmap(name=name, category=category, slug=name.lower(), description="", owner_id=owner_id)
        db.add(roadmap)
        db.flush()
        for position, title in enumerate(titles, start=1):
            db.add(Item(title=title, description="", position=position, owner_id=owner_id, roadmap_id=roadmap.id))
        db.commit()
        return roadmap

    return _make_roadmap


@pytest.fixture
def api(session_factory) -> Iterator[Callable[[], TestClient]]:
    """
    Factory for API clients sharing one test database. Each client has its
    own cookie jar, i.e. its own session.
    """

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.state.roadmap_locks = RoadmapLocks()
    clients: list[TestClient] = []

    def _client() -> TestClient:
        client = TestClient(app)
        clients.append(client)
        return client

    yield _client

    for client in clients:
        client.close()
    app.dependency_overrides.clear()


@pytest.fixture
def login(api) -> Callable[[str], TestClient]:
    """Register ``username`` and return a client carrying its session cookie."""

    def _login(username: str) -> TestClient:
        client = api()
        resp = client.post(
            "/api/v1/auth/register",
            json=register_payload(username),
        )
        assert resp.status_code == 201, resp.text
        return client

    return _login
