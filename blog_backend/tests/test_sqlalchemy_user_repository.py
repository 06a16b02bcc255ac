from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from blog_backend.domain.users.entities import NewUser
from blog_backend.domain.users.exceptions import UserAlreadyExistsError
from blog_backend.infrastructure.container import Container
from blog_backend.infrastructure.db import init_db
from blog_backend.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from blog_backend.shared.errors import StoreError


@pytest.fixture()
def repository(container: Container) -> SqlAlchemyUserRepository:
    init_db(container.engine)
    return SqlAlchemyUserRepository(container.session_factory)


def _alice() -> NewUser:
    return NewUser(username="alice", email="alice@example.com", password_hash="scrypt:hash")


def test_create_user_assigns_id_and_timestamps(repository: SqlAlchemyUserRepository) -> None:
    user = repository.create_user(_alice())

    assert len(user.id) == 36
    assert user.username == "alice"
    assert user.password_hash == "scrypt:hash"
    assert user.created_at is not None
    assert user.updated_at is not None


def test_find_by_username_or_email(repository: SqlAlchemyUserRepository) -> None:
    created = repository.create_user(_alice())

    by_username = repository.find_by_username_or_email("alice")
    by_email = repository.find_by_username_or_email("alice@example.com")

    assert by_username is not None and by_username.id == created.id
    assert by_email is not None and by_email.id == created.id
    assert repository.find_by_username_or_email("bob") is None


def test_find_by_id(repository: SqlAlchemyUserRepository) -> None:
    created = repository.create_user(_alice())

    found = repository.find_by_id(created.id)

    assert found is not None
    assert found.email == "alice@example.com"
    assert repository.find_by_id("00000000-0000-0000-0000-000000000000") is None


def test_timestamps_stay_timezone_aware_after_reload(
    repository: SqlAlchemyUserRepository,
) -> None:
    created = repository.create_user(_alice())

    reloaded = [
        repository.find_by_id(created.id),
        repository.find_by_username_or_email("alice"),
    ]

    for found in reloaded:
        assert found is not None
        assert found.created_at.tzinfo is not None
        assert found.updated_at.tzinfo is not None
        assert found.created_at == created.created_at
        assert found.updated_at == created.updated_at


@pytest.mark.parametrize(
    "duplicate",
    [
        NewUser(username="alice", email="other@example.com", password_hash="h"),
        NewUser(username="other", email="alice@example.com", password_hash="h"),
    ],
)
def test_unique_constraint_maps_to_user_already_exists(
    repository: SqlAlchemyUserRepository, duplicate: NewUser
) -> None:
    repository.create_user(_alice())

    with pytest.raises(UserAlreadyExistsError):
        repository.create_user(duplicate)

    assert repository.find_by_username_or_email("other") is None
    assert repository.find_by_username_or_email("other@example.com") is None


def test_database_failure_maps_to_store_error(container: Container) -> None:
    # Schema never created: every query fails with "no such table".
    repository = SqlAlchemyUserRepository(container.session_factory)

    with pytest.raises(StoreError) as excinfo:
        repository.find_by_username_or_email("alice")

    assert isinstance(excinfo.value.__cause__, OperationalError)
    assert excinfo.value.context == {"operation": "find_by_username_or_email"}
