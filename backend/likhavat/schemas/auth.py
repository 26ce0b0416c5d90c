"""Request/response contracts for /api/auth."""

import uuid
from typing import Optional

from pydantic import Field, field_validator

from likhavat.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=6, max_length=128)
    name: Optional[str] = Field(default=None, max_length=255)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        email = v.strip().lower()
        local, _, domain = email.partition("@")
        if not local or "." not in domain:
            raise ValueError("Please provide a valid email address")
        return email


class LoginRequest(CamelModel):
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserAccount(CamelModel):
    id: uuid.UUID
    email: str
    name: str


class AuthPayload(CamelModel):
    token: str = Field(description="Bearer token for the Authorization header")
    user: UserAccount
