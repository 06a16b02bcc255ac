"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from blog_backend.domain.users.repositories import PasswordHasher
from blog_backend.shared.errors import HashingError
from blog_backend.shared.logging import logger


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted scrypt hashes in werkzeug's ``method$salt$hash`` format."""

    def __init__(self, method: str = "scrypt", salt_length: int = 16) -> None:
        self._method = method
        self._salt_length = salt_length

    def hash(self, password: str) -> str:
        try:
            return str(
                generate_password_hash(
                    password, method=self._method, salt_length=self._salt_length
                )
            )
        except (MemoryError, ValueError, OSError) as exc:
            logger.error(f"password.hash: {self._method} failed: {type(exc).__name__}")
            raise HashingError() from exc

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return bool(check_password_hash(hashed, password))
        except ValueError:
            # Unknown method or malformed parameters in the stored hash.
            logger.warning("password.verify: unparseable stored hash")
            return False
