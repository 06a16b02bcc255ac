# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from urllib.parse import quote_plus

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

INSECURE_SECRETS = ("supersecretjwtkey", "dev", "development", "test", "")

_SETTINGS = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
)


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str | None = Field(None, alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    # Discrete connection parameters, used when DATABASE_URL is not set
    user: str | None = Field(None, alias="DB_USER")
    password: str | None = Field(None, alias="DB_PASSWORD")
    host: str | None = Field(None, alias="DB_HOST")
    port: int = Field(5432, alias="DB_PORT")
    name: str | None = Field(None, alias="DB_NAME")
    sslmode: str = Field("disable", alias="DB_SSLMODE")

    model_config = _SETTINGS

    @model_validator(mode="after")
    def _resolve_url(self) -> "DatabaseConfig":
        if self.url:
            return self
        if self.host and self.name:
            credentials = ""
            if self.user:
                credentials = quote_plus(self.user)
                if self.password:
                    credentials += f":{quote_plus(self.password)}"
                credentials += "@"
            self.url = (
                f"postgresql+psycopg://{credentials}{self.host}:{self.port}/{self.name}"
                f"?sslmode={self.sslmode}"
            )
        else:
            self.url = "sqlite:///blog.db"
        return self

    def is_sqlite(self) -> bool:
        return bool(self.url) and self.url.startswith("sqlite")

    def is_sqlite_memory(self) -> bool:
        return self.url in ("sqlite://", "sqlite:///:memory:")


class TokenConfig(BaseSettings):
    secret: str = Field("supersecretjwtkey", alias="JWT_SECRET")
    algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    access_token_exp_hours: int = Field(1, ge=1, alias="ACCESS_TOKEN_EXP_HOURS")
    refresh_token_exp_days: int = Field(7, ge=1, alias="REFRESH_TOKEN_EXP_DAYS")

    model_config = _SETTINGS

    @field_validator("algorithm", mode="after")
    @classmethod
    def _hmac_only(cls, value: str) -> str:
        value = value.upper()
        if value not in ("HS256", "HS384", "HS512"):
            raise ValueError("JWT_ALGORITHM must be one of HS256, HS384, HS512")
        return value

    @model_validator(mode="after")
    def _access_shorter_than_refresh(self) -> "TokenConfig":
        if self.access_lifetime >= self.refresh_lifetime:
            raise ValueError("access token lifetime must be shorter than refresh token lifetime")
        return self

    @property
    def access_lifetime(self) -> timedelta:
        return timedelta(hours=self.access_token_exp_hours)

    @property
    def refresh_lifetime(self) -> timedelta:
        return timedelta(days=self.refresh_token_exp_days)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _token_config_factory() -> TokenConfig:
    return TokenConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(8080, ge=1, le=65535, alias="PORT")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: Path | None = Field(None, alias="LOG_FILE")
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    tokens: TokenConfig = Field(default_factory=_token_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
    )

    @field_validator("debug_logging", "enable_hsts", mode="before")
    @classmethod
    def _parse_flags(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.tokens.secret in INSECURE_SECRETS:
            print(
                "\n❌ CRITICAL SECURITY ERROR: Insecure JWT_SECRET detected in production!\n"
                "   JWT_SECRET must be a strong random value in production.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        warnings = []
        if self.database.is_sqlite():
            warnings.append("⚠️  SQLite database in use")
        if not self.enable_hsts:
            warnings.append("⚠️  HSTS is DISABLED (recommended for HTTPS)")

        if warnings:
            print("\n⚠️  PRODUCTION SETTINGS WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = ["AppConfig", "DatabaseConfig", "TokenConfig", "load_config"]
