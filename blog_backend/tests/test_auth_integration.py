from __future__ import annotations

from flask.testing import FlaskClient
from sqlalchemy import func, select

from blog_backend.infrastructure.container import Container
from blog_backend.infrastructure.db.models import User


def _user_count(container: Container) -> int:
    with container.session_factory() as session:
        return session.scalar(select(func.count()).select_from(User))


def test_register_login_flow(client: FlaskClient, container: Container) -> None:
    register = client.post(
        "/register",
        json={"username": "alice", "email": "alice@example.com", "password": "correct-horse"},
    )
    assert register.status_code == 201
    user_id = register.get_json()["id"]
    assert user_id

    duplicate = client.post(
        "/register",
        json={"username": "alice", "email": "alice2@example.com", "password": "correct-horse"},
    )
    assert duplicate.status_code == 409
    assert _user_count(container) == 1

    wrong = client.post("/login", json={"username_or_email": "alice", "password": "wrong"})
    assert wrong.status_code == 401

    login = client.post(
        "/login", json={"username_or_email": "alice", "password": "correct-horse"}
    )
    assert login.status_code == 200
    tokens = login.get_json()
    assert tokens["access_token"]
    assert tokens["refresh_token"]
    assert tokens["access_token"] != tokens["refresh_token"]

    claims = container.validate_token_use_case.execute(tokens["refresh_token"])
    assert claims["user_id"] == user_id
    assert claims["username"] == "alice"


def test_stored_hash_is_salted_scrypt(client: FlaskClient, container: Container) -> None:
    client.post(
        "/register",
        json={"username": "alice", "email": "alice@example.com", "password": "correct-horse"},
    )

    with container.session_factory() as session:
        row = session.scalars(select(User)).one()

    assert row.password_hash.startswith("scrypt:")
    assert "correct-horse" not in row.password_hash
