# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.users.get_current_user import GetCurrentUserUseCase
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase
from .use_cases.users.validate_token import ValidateTokenUseCase

__all__ = [
    "GetCurrentUserUseCase",
    "LoginUserUseCase",
    "RegisterUserUseCase",
    "ValidateTokenUseCase",
]
