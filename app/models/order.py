# app/models/order.py
import uuid
from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field

from app.core.security import utcnow


class Order(SQLModel, table=True):
    """
    A user's request for a movie in a given quality and audio track.

    Status lifecycle:
      pending -> processing -> completed
      cancelled reachable from any non-terminal state
    """

    __tablename__ = "orders"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    # Free text; not a foreign key to movies
    movie_name: str = Field(max_length=255)

    movie_year: int | None = Field(default=None)

    # 720p | 1080p | 4k
    quality: str

    # latino | castellano | original
    audio_preference: str

    # pending | processing | completed | cancelled
    status: str = Field(
        default="pending",
        index=True,
    )

    notes: str | None = Field(default=None)

    created_at: datetime = Field(
        sa_type=DateTime(timezone=True),
        index=True,
    )

    updated_at: datetime = Field(
        sa_type=DateTime(timezone=True),
    )
