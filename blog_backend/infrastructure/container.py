# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from blog_backend.application.services.password_hashing import WerkzeugPasswordHasher
from blog_backend.application.services.tokens import JwtTokenService
from blog_backend.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from blog_backend.application.use_cases.users.login_user import LoginUserUseCase
from blog_backend.application.use_cases.users.register_user import RegisterUserUseCase
from blog_backend.application.use_cases.users.validate_token import ValidateTokenUseCase
from blog_backend.infrastructure.db import build_engine, build_session_factory
from blog_backend.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from blog_backend.interfaces.http.controllers.auth_controller import AuthController
from blog_backend.interfaces.http.controllers.misc_controller import MiscController
from blog_backend.shared.config import AppConfig


class Container:
    """Wires every collaborator from one ``AppConfig``; nothing is module-global."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_service(self) -> JwtTokenService:
        tokens = self.config.tokens
        return JwtTokenService(
            secret=tokens.secret,
            algorithm=tokens.algorithm,
            access_lifetime=tokens.access_lifetime,
            refresh_lifetime=tokens.refresh_lifetime,
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            tokens=self.token_service,
        )

    @cached_property
    def validate_token_use_case(self) -> ValidateTokenUseCase:
        return ValidateTokenUseCase(tokens=self.token_service)

    @cached_property
    def get_current_user_use_case(self) -> GetCurrentUserUseCase:
        return GetCurrentUserUseCase(users=self.user_repository, tokens=self.token_service)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            current_user_use_case=self.get_current_user_use_case,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController()

    def dispose(self) -> None:
        if "engine" in self.__dict__:
            self.engine.dispose()
