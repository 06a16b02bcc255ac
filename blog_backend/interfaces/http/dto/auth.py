from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blog_backend.domain.users.entities import AuthTokens, User


class RegisterRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)

    model_config = ConfigDict(extra="ignore")

    @field_validator("username", "email", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value


class LoginRequestDTO(BaseModel):
    username_or_email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)  # No strength check on login

    model_config = ConfigDict(extra="ignore")

    @field_validator("username_or_email", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value


class UserDTO(BaseModel):
    id: str
    username: str
    email: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> UserDTO:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class AuthTokensDTO(BaseModel):
    access_token: str
    refresh_token: str

    @classmethod
    def from_domain(cls, tokens: AuthTokens) -> AuthTokensDTO:
        return cls(access_token=tokens.access_token, refresh_token=tokens.refresh_token)
