import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db
from app.db.base import Base
from app.db.models import Tag, User
from app.main import app as api_app
from app.schemas.counter import CounterCreate
from app.services.auth import create_access_token
from app.services.counters import create_counter


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def users(db):
    alice = User(email="alice@example.com", username="alice")
    bob = User(email="bob@example.com", username="bob")
    db.add_all([alice, bob])
    db.commit()
    return {"alice": alice.id, "bob": bob.id}


@pytest.fixture
def tags(db):
    rows = [
        Tag(name="Health", slug="health"),
        Tag(name="Work", slug="work"),
        Tag(name="Personal", slug="personal"),
    ]
    db.add_all(rows)
    db.commit()
    return {tag.slug: tag.id for tag in rows}


@pytest.fixture
def make_counter(db, users):
    def _make(owner: str = "alice", **fields):
        fields.setdefault("name", "My Daily Run")
        fields.setdefault("start_date", date(2024, 1, 10))
        return create_counter(db, CounterCreate(**fields), users[owner])

    return _make


@pytest.fixture
def client(session_factory):
    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    api_app.dependency_overrides[get_db] = _get_test_db
    with TestClient(api_app) as test_client:
        yield test_client
    api_app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(users):
    def _headers(owner: str = "alice") -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(users[owner])}"}

    return _headers
