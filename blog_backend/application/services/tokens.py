"""Signed access/refresh token issuance and validation."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from blog_backend.domain.users.entities import AuthTokens
from blog_backend.domain.users.exceptions import TokenInvalidError
from blog_backend.domain.users.repositories import TokenService
from blog_backend.shared.logging import logger

HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenService(TokenService):
    """Issues HMAC-signed JWT pairs and verifies them.

    Both tokens of a pair carry the same subject claims and differ only in
    ``exp``. Validation accepts the configured algorithm only, so a token
    re-signed with ``none`` or an asymmetric algorithm is rejected.
    """

    def __init__(
        self,
        *,
        secret: str,
        access_lifetime: timedelta,
        refresh_lifetime: timedelta,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("token signing secret must not be empty")
        if algorithm not in HMAC_ALGORITHMS:
            raise ValueError(f"unsupported token algorithm {algorithm!r}")
        if access_lifetime <= timedelta(0) or refresh_lifetime <= timedelta(0):
            raise ValueError("token lifetimes must be positive")
        if access_lifetime >= refresh_lifetime:
            raise ValueError("access token lifetime must be shorter than refresh token lifetime")
        self._secret = secret
        self._algorithm = algorithm
        self._access_lifetime = access_lifetime
        self._refresh_lifetime = refresh_lifetime
        self._clock = clock

    def issue(self, claims: Mapping[str, Any]) -> AuthTokens:
        now = self._clock()
        return AuthTokens(
            access_token=self._encode(claims, now + self._access_lifetime),
            refresh_token=self._encode(claims, now + self._refresh_lifetime),
        )

    def validate(self, token: str) -> dict[str, Any]:
        """Decoded claims, ``exp`` included. Every failure raises ``TokenInvalidError``."""
        try:
            return dict(
                jwt.decode(
                    token,
                    self._secret,
                    algorithms=[self._algorithm],
                    options={"require": ["exp"]},
                )
            )
        except jwt.ExpiredSignatureError as exc:
            logger.info("token.validate: expired")
            raise TokenInvalidError() from exc
        except jwt.InvalidAlgorithmError as exc:
            logger.warning("token.validate: algorithm mismatch")
            raise TokenInvalidError() from exc
        except jwt.InvalidTokenError as exc:
            logger.info(f"token.validate: rejected ({type(exc).__name__})")
            raise TokenInvalidError() from exc

    def _encode(self, claims: Mapping[str, Any], expires_at: datetime) -> str:
        payload = dict(claims)
        payload["exp"] = expires_at
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)


__all__ = ["JwtTokenService", "HMAC_ALGORITHMS"]
