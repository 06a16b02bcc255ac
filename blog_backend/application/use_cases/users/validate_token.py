"""Use-case for checking a presented access or refresh token."""

from __future__ import annotations

from typing import Any

from blog_backend.domain.users.repositories import TokenService


class ValidateTokenUseCase:
    def __init__(self, *, tokens: TokenService) -> None:
        self._tokens = tokens

    def execute(self, token: str) -> dict[str, Any]:
        return self._tokens.validate(token)
