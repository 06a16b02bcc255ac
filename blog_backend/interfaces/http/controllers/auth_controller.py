# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, g, jsonify, request
from pydantic import ValidationError

from blog_backend.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from blog_backend.application.use_cases.users.login_user import LoginUserUseCase
from blog_backend.application.use_cases.users.register_user import RegisterUserUseCase
from blog_backend.domain.users.exceptions import (
    InvalidCredentialsError,
    TokenInvalidError,
    UserAlreadyExistsError,
)
from blog_backend.infrastructure.audit import AuditAction, audit_log
from blog_backend.interfaces.http.dto.auth import (
    AuthTokensDTO,
    LoginRequestDTO,
    RegisterRequestDTO,
    UserDTO,
)
from blog_backend.shared.errors.validation import raise_validation_error
from blog_backend.shared.logging import logger


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def _bearer_token() -> str:
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        current_user_use_case: GetCurrentUserUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._current_user_use_case = current_user_use_case

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            user = self._register_use_case.execute(dto.username, dto.email, dto.password)
        except UserAlreadyExistsError:
            audit_log(
                AuditAction.REGISTER_REJECTED,
                ip_address=_get_client_ip(),
                details={"username": dto.username, "reason": "duplicate"},
                success=False,
            )
            raise

        audit_log(
            AuditAction.REGISTER,
            user_id=user.id,
            ip_address=_get_client_ip(),
            details={"username": user.username},
            success=True,
        )
        logger.info(f"auth.register: ok user_id={user.id}")
        return jsonify(UserDTO.from_domain(user).model_dump(mode="json")), HTTPStatus.CREATED

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = _get_client_ip()

        try:
            user, tokens = self._login_use_case.execute(dto.username_or_email, dto.password)
        except InvalidCredentialsError:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"identifier": dto.username_or_email},
                success=False,
            )
            raise

        g.user_id = user.id
        audit_log(
            AuditAction.LOGIN_SUCCESS,
            user_id=user.id,
            ip_address=ip_address,
            details={"username": user.username},
            success=True,
        )
        logger.info(f"auth.login: ok user_id={user.id}")
        return jsonify(AuthTokensDTO.from_domain(tokens).model_dump()), HTTPStatus.OK

    def me(self) -> tuple[Response, int]:
        try:
            user = self._current_user_use_case.execute(_bearer_token())
        except TokenInvalidError:
            audit_log(
                AuditAction.TOKEN_REJECTED,
                ip_address=_get_client_ip(),
                details={"path": request.path},
                success=False,
            )
            raise

        g.user_id = user.id
        return jsonify(UserDTO.from_domain(user).model_dump(mode="json")), HTTPStatus.OK

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        return bp
