# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from blog_backend.shared.logging import logger

from .base import AppError, InfrastructureError


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _internal_error(default_status: HTTPStatus) -> tuple[Response, HTTPStatus]:
    return jsonify({"error": "internal_error"}), default_status


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    response = jsonify(error.to_dict())
    return response, error.status


def register_error_handler(
    app: Flask,
    *,
    debug_mode: bool = False,
    default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> None:
    @app.errorhandler(InfrastructureError)
    def _handle_infrastructure(exc: InfrastructureError):
        # Infrastructure detail stays in the server log.
        cause = exc.__cause__
        logger.opt(exception=exc).error(
            f"Infrastructure failure {exc.code} on {request.method} {request.path}: "
            f"context={dict(exc.context or {})} cause={type(cause).__name__ if cause else None}"
        )
        return _internal_error(default_status)

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        logger.info(f"Handled application error {exc.code} on {request.method} {request.path}")
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        if debug_mode:
            logger.exception(
                f"Unhandled exception: {request.method} {request.path} "
                f"from {_client_ip()}, query={dict(request.args)}, body_size={len(request.data)}"
            )
        else:
            logger.error(f"Error: {type(exc).__name__} on {request.method} {request.path}")
        return _internal_error(default_status)
