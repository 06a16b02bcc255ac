"""Use-case resolving the user behind a bearer token."""

from __future__ import annotations

from blog_backend.domain.users.entities import User
from blog_backend.domain.users.exceptions import TokenInvalidError
from blog_backend.domain.users.repositories import TokenService, UserRepository


class GetCurrentUserUseCase:
    def __init__(self, *, users: UserRepository, tokens: TokenService) -> None:
        self._users = users
        self._tokens = tokens

    def execute(self, token: str) -> User:
        claims = self._tokens.validate(token)
        user_id = claims.get("user_id")
        if not isinstance(user_id, str) or not user_id:
            raise TokenInvalidError()

        user = self._users.find_by_id(user_id)
        if user is None:
            raise TokenInvalidError()
        return user
