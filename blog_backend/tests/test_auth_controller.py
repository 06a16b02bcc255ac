from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient

from blog_backend.app import create_app
from blog_backend.infrastructure.container import Container
from blog_backend.shared.errors import StoreError

ALICE = {"username": "alice", "email": "alice@example.com", "password": "correct-horse"}


def _register(client: FlaskClient, payload: dict | None = None):
    return client.post("/register", json=payload or ALICE)


def test_health_returns_constant_payload(client: FlaskClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok", "message": "Blog API is running"}
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "X-Request-ID" in response.headers


def test_register_returns_created_user_without_hash(client: FlaskClient) -> None:
    response = _register(client)

    assert response.status_code == 201
    payload = response.get_json()
    assert set(payload) == {"id", "username", "email", "created_at", "updated_at"}
    assert payload["id"]
    assert payload["username"] == "alice"
    body = response.get_data(as_text=True)
    assert "password" not in body
    assert "correct-horse" not in body
    assert "scrypt" not in body


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"username": "alice", "email": "alice@example.com"},
        {"username": "", "email": "alice@example.com", "password": "pw"},
        {"username": "   ", "email": "alice@example.com", "password": "pw"},
        {"username": "alice", "email": "alice@example.com", "password": ""},
        {"username": 7, "email": "alice@example.com", "password": "pw"},
    ],
)
def test_register_rejects_missing_fields(client: FlaskClient, payload: dict) -> None:
    response = client.post("/register", json=payload)

    assert response.status_code == 400
    assert response.get_json()["error"] == "validation_error"


def test_register_rejects_non_json_body(client: FlaskClient) -> None:
    response = client.post("/register", data="username=alice", content_type="text/plain")

    assert response.status_code == 400


def test_register_duplicate_returns_conflict(client: FlaskClient) -> None:
    _register(client)

    response = _register(
        client, {"username": "alice", "email": "new@example.com", "password": "pw"}
    )

    assert response.status_code == 409
    assert response.get_json() == {"error": "user_already_exists"}


def test_login_returns_token_pair(client: FlaskClient) -> None:
    _register(client)

    response = client.post(
        "/login", json={"username_or_email": "alice@example.com", "password": "correct-horse"}
    )

    assert response.status_code == 200
    payload = response.get_json()
    assert set(payload) == {"access_token", "refresh_token"}
    assert payload["access_token"] != payload["refresh_token"]


@pytest.mark.parametrize(
    "payload",
    [
        {"username_or_email": "alice", "password": "wrong"},
        {"username_or_email": "nobody", "password": "correct-horse"},
    ],
)
def test_login_failures_return_identical_401(client: FlaskClient, payload: dict) -> None:
    _register(client)

    response = client.post("/login", json=payload)

    assert response.status_code == 401
    assert response.get_json() == {"error": "invalid_credentials"}


def test_long_passwords_are_accepted(client: FlaskClient) -> None:
    password = "p" * 500

    registered = _register(
        client, {"username": "alice", "email": "alice@example.com", "password": password}
    )
    response = client.post("/login", json={"username_or_email": "alice", "password": password})

    assert registered.status_code == 201
    assert response.status_code == 200


def test_login_rejects_missing_fields(client: FlaskClient) -> None:
    response = client.post("/login", json={"username_or_email": "alice"})

    assert response.status_code == 400
    assert response.get_json()["context"]["fields"] == ["password"]


def test_me_returns_user_for_access_token(client: FlaskClient) -> None:
    created = _register(client).get_json()
    tokens = client.post(
        "/login", json={"username_or_email": "alice", "password": "correct-horse"}
    ).get_json()

    response = client.get("/me", headers={"Authorization": f"Bearer {tokens['access_token']}"})

    assert response.status_code == 200
    assert response.get_json() == created


@pytest.mark.parametrize("header", [None, "Bearer nonsense", "Basic YWxpY2U6cHc="])
def test_me_rejects_missing_or_invalid_token(client: FlaskClient, header: str | None) -> None:
    headers = {"Authorization": header} if header else {}

    response = client.get("/me", headers=headers)

    assert response.status_code == 401
    assert response.get_json() == {"error": "token_invalid"}


class _BrokenRepository:
    def find_by_username_or_email(self, identifier: str):
        raise StoreError("find_by_username_or_email")

    def find_by_id(self, user_id: str):
        raise StoreError("find_by_id")

    def create_user(self, user):
        raise StoreError("create_user")


def test_store_failure_is_opaque_500(container: Container) -> None:
    container.user_repository = _BrokenRepository()  # type: ignore[assignment]
    app: Flask = create_app(container=container)

    with app.test_client() as client:
        register = _register(client)
        login = client.post("/login", json={"username_or_email": "alice", "password": "pw"})

    for response in (register, login):
        assert response.status_code == 500
        assert response.get_json() == {"error": "internal_error"}


def test_unknown_route_is_404(client: FlaskClient) -> None:
    assert client.get("/nope").status_code == 404
