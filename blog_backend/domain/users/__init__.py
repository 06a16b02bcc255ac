# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import AuthTokens, NewUser, User
from .exceptions import InvalidCredentialsError, TokenInvalidError, UserAlreadyExistsError
from .repositories import PasswordHasher, TokenService, UserRepository

__all__ = [
    "AuthTokens",
    "NewUser",
    "User",
    "InvalidCredentialsError",
    "TokenInvalidError",
    "UserAlreadyExistsError",
    "PasswordHasher",
    "TokenService",
    "UserRepository",
]
