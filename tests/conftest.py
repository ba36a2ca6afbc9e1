"""Shared fixtures.

MongoDB is replaced by mongomock behind the regular mongoengine connection,
so repositories, migrations and the unique email index behave as in
production without a server. Each test gets a fresh database.
"""
from uuid import uuid4

import mongomock
import pytest
from fastapi.testclient import TestClient
from mongoengine import connect, disconnect

from app.factory import create_app
from app.migrations import run_migrations
from app.repositories.users import users_repository
from app.services.users import PasswordHasher, UserService
from app.utils.config import Settings
from tests.helpers import TEST_USER_EMAIL, TEST_USER_PASSWORD


@pytest.fixture
def settings() -> Settings:
    """Explicit settings; bcrypt kept at its minimum cost for speed."""
    return Settings(
        _env_file=None,
        mongodb_uri="mongodb://localhost:27017/users_test",
        jwt_secret="test-jwt-secret-for-testing-only",
        jwt_expiration=3600,
        bcrypt_rounds=4,
        graphql_ide=False,
    )


@pytest.fixture
def mongo():
    """In-memory MongoDB with migrations applied."""
    connect(
        f"users_test_{uuid4().hex}",
        host="mongodb://localhost",
        alias="default",
        mongo_client_class=mongomock.MongoClient,
        tz_aware=True,
    )
    run_migrations()
    try:
        yield
    finally:
        disconnect(alias="default")


@pytest.fixture
def passwords(settings: Settings) -> PasswordHasher:
    return PasswordHasher(rounds=settings.bcrypt_rounds)


@pytest.fixture
def user_service(mongo, passwords: PasswordHasher) -> UserService:
    return UserService(users_repository(), passwords)


@pytest.fixture
def registered_user(user_service: UserService) -> dict:
    return user_service.create({"email": TEST_USER_EMAIL, "password": TEST_USER_PASSWORD})


@pytest.fixture
def test_client(mongo, settings: Settings) -> TestClient:
    """Client without the lifespan; the `mongo` fixture owns the connection."""
    return TestClient(create_app(settings))


@pytest.fixture
def logged_in_client(test_client: TestClient, registered_user: dict) -> TestClient:
    response = test_client.post(
        "/auth/login",
        json={"email": TEST_USER_EMAIL, "password": TEST_USER_PASSWORD},
    )
    assert response.status_code == 200
    return test_client

