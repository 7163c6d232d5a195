# tests/conftest.py
import os

# Must be set before flyer_api.config builds its settings instance.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("APP_ENV", "testing")

from typing import Dict, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from flyer_api.db.models import Base
from flyer_api.db.session import build_engine, get_session
from flyer_api.main import app
from flyer_api.repositories import ProductsRepository, UsersRepository


@pytest.fixture(scope="function")
def engine():
    """A fresh in-memory database per test, shared across threads."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture(scope="function")
def db_session(session_factory) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(session_factory) -> Iterator[TestClient]:
    """
    TestClient whose requests run against the per-test database.
    """

    def _get_session() -> Iterator[Session]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_session] = _get_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_session, None)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


def register_user(client: TestClient, email: str, password: str = "secret123") -> Dict[str, str]:
    """Register through the API and return bearer headers for the new user."""
    response = client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "firstName": "Test", "lastName": "User"},
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def alice(client) -> Dict[str, str]:
    return register_user(client, "alice@example.com")


@pytest.fixture
def bob(client) -> Dict[str, str]:
    return register_user(client, "bob@example.com")


# ---------------------------------------------------------------------------
# Direct repository helpers (no HTTP)
# ---------------------------------------------------------------------------


@pytest.fixture
def make_user(db_session):
    users = UsersRepository(db_session)

    def _make(email: str):
        user = users.create(email=email, password_hash="not-a-real-hash")
        db_session.commit()
        return user

    return _make


@pytest.fixture
def make_product(db_session):
    products = ProductsRepository(db_session)

    def _make(owner_id: str, name: str, price: float = 1.0, **fields):
        fields.setdefault("category", "general")
        product = products.create(owner_id, name=name, price=price, **fields)
        db_session.commit()
        return product

    return _make
