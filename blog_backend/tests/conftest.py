from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import pytest
from flask import Flask
from flask.testing import FlaskClient

from blog_backend.app import create_app
from blog_backend.application.services.tokens import JwtTokenService
from blog_backend.domain.users.entities import NewUser, User
from blog_backend.domain.users.exceptions import UserAlreadyExistsError
from blog_backend.domain.users.repositories import PasswordHasher, UserRepository
from blog_backend.infrastructure.container import Container
from blog_backend.shared.config import AppConfig, DatabaseConfig, TokenConfig

TEST_SECRET = "test-signing-secret-with-enough-entropy-for-every-hmac-variant-0123456789"


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.lookups: list[str] = []

    def create_user(self, user: NewUser) -> User:
        for existing in self.users.values():
            if existing.username == user.username or existing.email == user.email:
                raise UserAlreadyExistsError()
        now = datetime.now(UTC)
        created = User(
            id=str(uuid.uuid4()),
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            created_at=now,
            updated_at=now,
        )
        self.users[created.id] = created
        return created

    def find_by_username_or_email(self, identifier: str) -> User | None:
        self.lookups.append(identifier)
        for user in self.users.values():
            if identifier in (user.username, user.email):
                return user
        return None

    def find_by_id(self, user_id: str) -> User | None:
        return self.users.get(user_id)


class DeterministicHasher(PasswordHasher):
    def __init__(self) -> None:
        self.hash_calls = 0
        self.verify_calls = 0

    def hash(self, password: str) -> str:
        self.hash_calls += 1
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        self.verify_calls += 1
        return hashed == f"hashed:{password}"


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def token_service() -> JwtTokenService:
    return JwtTokenService(
        secret=TEST_SECRET,
        access_lifetime=timedelta(hours=1),
        refresh_lifetime=timedelta(days=7),
    )


@pytest.fixture()
def app_config() -> AppConfig:
    return AppConfig(
        APP_ENV="test",
        database=DatabaseConfig(DATABASE_URL="sqlite://"),
        tokens=TokenConfig(JWT_SECRET=TEST_SECRET),
    )


@pytest.fixture()
def container(app_config: AppConfig) -> Container:
    built = Container(app_config)
    yield built
    built.dispose()


@pytest.fixture()
def flask_app(container: Container) -> Flask:
    return create_app(container=container)


@pytest.fixture()
def client(flask_app: Flask) -> FlaskClient:
    with flask_app.test_client() as test_client:
        yield test_client
