# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from .entities import AuthTokens, NewUser, User


class UserRepository(Protocol):
    def create_user(self, user: NewUser) -> User: ...
    def find_by_username_or_email(self, identifier: str) -> User | None: ...
    def find_by_id(self, user_id: str) -> User | None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenService(Protocol):
    def issue(self, claims: Mapping[str, Any]) -> AuthTokens: ...
    def validate(self, token: str) -> dict[str, Any]:
        """Return the claims passed to ``issue`` plus the integer ``exp`` (epoch seconds)."""
        ...
