# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from blog_backend.domain.users.entities import NewUser
from blog_backend.domain.users.entities import User as DomainUser
from blog_backend.domain.users.exceptions import UserAlreadyExistsError
from blog_backend.domain.users.repositories import UserRepository
from blog_backend.infrastructure.db.models import User
from blog_backend.infrastructure.unit_of_work import unit_of_work_scope
from blog_backend.shared.errors import StoreError
from blog_backend.shared.logging import logger


def _as_utc(value: datetime) -> datetime:
    # SQLite returns naive values for DateTime(timezone=True); they were stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def create_user(self, user: NewUser) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(
                    username=user.username,
                    email=user.email,
                    password_hash=user.password_hash,
                )
                session.add(row)
                session.flush()
                created = _to_domain(row)
        except IntegrityError as exc:
            # Lost a race with a concurrent registration; the unique index decides.
            logger.info("users.create: unique constraint rejected insert")
            raise UserAlreadyExistsError() from exc
        except SQLAlchemyError as exc:
            raise StoreError("create_user") from exc
        logger.info(f"users.create: ok user_id={created.id}")
        return created

    def find_by_username_or_email(self, identifier: str) -> DomainUser | None:
        stmt = (
            select(User)
            .where(or_(User.username == identifier, User.email == identifier))
            .limit(1)
        )
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.scalars(stmt).first()
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            raise StoreError("find_by_username_or_email") from exc

    def find_by_id(self, user_id: str) -> DomainUser | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.get(User, user_id)
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            raise StoreError("find_by_id") from exc
