"""User and auth request/response models."""

import re
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from taskhub.api.models.common import DateTimeWithZ
from taskhub.domain.models.user import User

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _validate_email(value: str) -> str:
    email = value.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Please enter a valid email address")
    return email


class UserRef(BaseModel):
    """Compact user embedded in task responses."""

    id: UUID
    username: str
    email: str

    @classmethod
    def from_domain(cls, user: User) -> "UserRef":
        return cls(id=user.id, username=user.username, email=user.email)


class UserResponse(BaseModel):
    """A user account. The password hash is never included."""

    id: UUID
    username: str
    email: str
    role: Literal["user", "admin"]
    created_at: DateTimeWithZ

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role.value,
            created_at=user.created_at,
        )


class AuthPayload(BaseModel):
    """Data returned by register and login."""

    token: str = Field(..., description="Bearer token, valid for 24 hours")
    user: UserResponse


class RegisterRequest(BaseModel):
    """Public registration. The account always gets the ``user`` role."""

    username: str = Field(..., examples=["alice"])
    email: str = Field(..., examples=["alice@example.com"])
    password: str = Field(..., min_length=6)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        username = v.strip()
        if not 3 <= len(username) <= 50:
            raise ValueError("Username must be between 3 and 50 characters")
        return username

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _validate_email(v)


class LoginRequest(BaseModel):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Username is required")
        return v.strip()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class InitialTaskRequest(BaseModel):
    """Task created for a user registered by an admin."""

    heading: str = Field(..., max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    status: str | None = Field(default=None, examples=["TO_DO"])
    project_id: UUID | None = None


class AdminRegisterRequest(RegisterRequest):
    """Admin registration: any role, optionally with an initial task."""

    role: Literal["user", "admin"] = "user"
    project_id: UUID | None = None
    task_data: InitialTaskRequest | None = None


class ProfileUpdateRequest(BaseModel):
    """Fields left out (or empty) are not changed."""

    username: str | None = None
    email: str | None = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        username = v.strip()
        if not 3 <= len(username) <= 50:
            raise ValueError("Username must be between 3 and 50 characters")
        return username

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return _validate_email(v)
