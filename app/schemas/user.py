# app/schemas/user.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field

Role = Literal["user", "admin"]

MIN_PASSWORD_LENGTH = 6


class SignUpRequest(SQLModel):
    """
    Self-service registration.

    Validation rules:
      - email must be a valid EmailStr; it is case-folded
      - name cannot be empty or whitespace
      - password has a minimum length
    """

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    name: str = Field(max_length=100)
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, max_length=128)
    phone: str | None = Field(default=None, max_length=30)

    @field_validator("email")
    @classmethod
    def fold_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class SignInRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def fold_email(cls, v: str) -> str:
        return v.strip().lower()


class UserPublic(SQLModel):
    """Minimal projection returned by sign-in and /auth/me."""

    id: uuid.UUID
    email: str
    name: str
    role: Role


class SessionUser(UserPublic):
    """Current-user view: public projection plus own profile fields."""

    phone: str | None
    created_at: datetime
    last_login: datetime | None


class SignUpResponse(SQLModel):
    user_id: uuid.UUID
    token: str


class SignInResponse(SQLModel):
    token: str
    token_type: str = "bearer"
    user: UserPublic


class IsAdminResponse(SQLModel):
    is_admin: bool


class ProfileUpdate(SQLModel):
    """
    Partial self-service profile update.

    Only provided fields are applied. A password change requires both
    `current_password` and `new_password`.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=30)
    current_password: str | None = None
    new_password: str | None = Field(
        default=None,
        min_length=MIN_PASSWORD_LENGTH,
        max_length=128,
    )

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class UserRead(SQLModel):
    """Admin view of a user. Never includes the password hash."""

    id: uuid.UUID
    email: str
    name: str
    role: Role
    phone: str | None
    is_active: bool
    created_at: datetime
    last_login: datetime | None


class UserCreate(SQLModel):
    """
    Admin-side account creation with an explicit role.
    """

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    name: str = Field(max_length=100)
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, max_length=128)
    role: Role = "user"
    phone: str | None = Field(default=None, max_length=30)

    @field_validator("email")
    @classmethod
    def fold_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class UserUpdate(SQLModel):
    """
    Admin partial update.
    Email changes are re-checked for uniqueness by the service.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=30)
    role: Role | None = None

    @field_validator("email")
    @classmethod
    def fold_email(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return v.strip().lower()

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class UserRoleUpdate(SQLModel):
    """
    Admin-only role update schema.
    """

    model_config = ConfigDict(extra="forbid")
    role: Role


class UserActiveToggle(SQLModel):
    id: uuid.UUID
    is_active: bool
