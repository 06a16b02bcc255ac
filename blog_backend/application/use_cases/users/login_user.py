# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from blog_backend.domain.users.entities import AuthTokens, User
from blog_backend.domain.users.exceptions import InvalidCredentialsError
from blog_backend.domain.users.repositories import PasswordHasher, TokenService, UserRepository


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._tokens = tokens
        self._dummy_hash: str | None = None

    def _dummy_digest(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = self._password_hasher.hash(secrets.token_urlsafe(16))
        return self._dummy_hash

    def execute(self, username_or_email: str, password: str) -> tuple[User, AuthTokens]:
        user = self._users.find_by_username_or_email(username_or_email)

        # Unknown identifiers still pay for one verify so both failures cost the same.
        if user is None:
            self._password_hasher.verify(password, self._dummy_digest())
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()

        return user, self._tokens.issue(user.subject_claims())
