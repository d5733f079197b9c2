# app/models/movie.py
import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime
from sqlmodel import SQLModel, Field

from app.core.security import utcnow


class Movie(SQLModel, table=True):
    """
    Catalog entry shown on the storefront.

    Orders do not reference movies; they carry a free-text movie name.
    """

    __tablename__ = "movies"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    title: str = Field(
        max_length=255,
        index=True,
    )

    year: int = Field(index=True)

    genre: str = Field(
        max_length=50,
        index=True,
    )

    # Subset of 720p | 1080p | 4k
    qualities: list[str] = Field(
        default_factory=list,
        sa_type=JSON,
    )

    image_url: str | None = Field(
        default=None,
        description="Poster URL (external or Supabase Storage)",
    )

    is_available: bool = Field(
        default=True,
        index=True,
    )

    added_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        index=True,
        description="Creation timestamp (UTC)",
    )
