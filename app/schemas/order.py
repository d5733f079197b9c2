# app/schemas/order.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

Quality = Literal["720p", "1080p", "4k"]
AudioPreference = Literal["latino", "castellano", "original"]
OrderStatus = Literal["pending", "processing", "completed", "cancelled"]

MIN_MOVIE_YEAR = 1888
MAX_MOVIE_YEAR = 2100


class OrderCreate(SQLModel):
    """
    Payload for requesting a movie.

    User provides:
      - movie_name (free text)
      - movie_year (optional)
      - quality, audio_preference
      - notes (optional)

    Backend derives:
      - user_id from the session (or path, for admin-created orders)
      - status = 'pending'
      - created_at = updated_at = now
    """

    model_config = ConfigDict(extra="forbid")

    movie_name: str = Field(max_length=255)
    movie_year: int | None = Field(default=None, ge=MIN_MOVIE_YEAR, le=MAX_MOVIE_YEAR)
    quality: Quality
    audio_preference: AudioPreference
    notes: str | None = None

    @field_validator("movie_name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("movie_name cannot be empty")
        return v

    @field_validator("notes", mode="before")
    @classmethod
    def normalize_notes(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class OrderUser(SQLModel):
    """Minimal owner projection joined onto admin order listings."""

    id: uuid.UUID
    name: str
    email: str


class OrderRead(SQLModel):
    """
    Order as seen by its owner.
    """

    id: uuid.UUID
    user_id: uuid.UUID
    movie_name: str
    movie_year: int | None
    quality: Quality
    audio_preference: AudioPreference
    status: OrderStatus
    notes: str | None
    created_at: datetime
    updated_at: datetime


class OrderWithUserRead(OrderRead):
    """
    Order joined with its owner (admin listings).
    `user` is None only if the owner row is gone.
    """

    user: OrderUser | None


class OrderStatusUpdate(SQLModel):
    """
    Admin payload to set an order's status.

    Any status may be set from any other status (admin override).
    `notes` replaces the current notes when provided.
    """

    model_config = ConfigDict(extra="forbid")

    status: OrderStatus
    notes: str | None = None
