# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from blog_backend.domain.users.entities import NewUser, User
from blog_backend.domain.users.exceptions import UserAlreadyExistsError
from blog_backend.domain.users.repositories import PasswordHasher, UserRepository


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, username: str, email: str, password: str) -> User:
        # Both identifiers are checked before the (slow) hash is computed.
        for identifier in (username, email):
            if self._users.find_by_username_or_email(identifier) is not None:
                raise UserAlreadyExistsError()

        hashed = self._password_hasher.hash(password)
        return self._users.create_user(
            NewUser(username=username, email=email, password_hash=hashed)
        )
