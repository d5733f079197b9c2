# app/models/user.py
import uuid
from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field

from app.core.security import utcnow


class User(SQLModel, table=True):
    """
    Account for a storefront customer or a dashboard administrator.

    Role:
      - "user" | "admin"

    Email is stored case-folded; uniqueness is enforced by the service
    layer and by the unique index below. Passwords are stored as salted
    PBKDF2 hashes only.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    email: str = Field(
        unique=True,
        index=True,
        max_length=255,
        description="Lowercased login email",
    )

    name: str = Field(
        max_length=100,
        description="Display name",
    )

    password_hash: str = Field(
        max_length=255,
        description="passlib pbkdf2_sha256 hash (salt embedded)",
    )

    role: str = Field(
        default="user",
        index=True,
        description="Application role: user | admin",
    )

    phone: str | None = Field(
        default=None,
        max_length=30,
    )

    is_active: bool = Field(
        default=True,
        index=True,
        description="Inactive accounts cannot sign in and their sessions stop working",
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        index=True,
        description="Creation timestamp (UTC)",
    )

    last_login: datetime | None = Field(
        default=None,
        sa_type=DateTime(timezone=True),
    )


class UserSession(SQLModel, table=True):
    """
    Opaque bearer token issued at sign-in / sign-up.

    A session authenticates only while `expires_at > now` and its user is
    active. Expired rows are ignored on lookup, not purged.
    """

    __tablename__ = "sessions"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
    )

    token: str = Field(
        unique=True,
        index=True,
        max_length=128,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    expires_at: datetime = Field(
        sa_type=DateTime(timezone=True),
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
    )
