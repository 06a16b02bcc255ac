# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from blog_backend.shared.config import DatabaseConfig
from blog_backend.shared.logging import logger


class Base(DeclarativeBase):
    pass


def build_engine(config: DatabaseConfig) -> Engine:
    url = config.url or "sqlite:///blog.db"

    if config.is_sqlite_memory():
        # One shared connection, otherwise every checkout sees an empty database.
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    connect_args: dict[str, object] = {}
    if config.is_sqlite():
        connect_args = {
            "check_same_thread": False,
            "timeout": int(config.pool_timeout),
        }

    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
        pool_timeout=config.pool_timeout,
        connect_args=connect_args,
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    # Registers the mapped tables on Base.metadata.
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ensured")
