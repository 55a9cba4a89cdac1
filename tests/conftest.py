"""Shared pytest fixtures."""

import os

# Must be set before sapients.core.config is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DELETE_PASSWORD", "deleteit")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sapients.db.session import create_tables, get_db
from sapients.models.role import Role
from sapients.services.auth_service import auth_service

DEFAULT_PASSWORD = "correct-horse"


@pytest.fixture()
def engine():
    """In-memory SQLite shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_user(db):
    def _make(email="user@sapients.test", role=Role.VIEWER, password=DEFAULT_PASSWORD, name=None):
        return auth_service.create_user(
            db, email=email, name=name or email.split("@")[0], password=password, role=role,
        )
    return _make


@pytest.fixture()
def app(session_factory):
    from sapients.main import app

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def login(client, make_user):
    """Create a user with `role` and log the test client in as them."""
    def _login(role=Role.VIEWER, email=None):
        email = email or f"{role.value.lower()}@sapients.test"
        user = make_user(email=email, role=role)
        resp = client.post("/api/auth/login", json={"email": email, "password": DEFAULT_PASSWORD})
        assert resp.status_code == 200, resp.text
        return user
    return _login
