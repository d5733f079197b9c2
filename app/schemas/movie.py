# app/schemas/movie.py
import uuid
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from app.schemas.order import MAX_MOVIE_YEAR, MIN_MOVIE_YEAR, Quality


def _dedupe(values: list[str]) -> list[str]:
    seen: list[str] = []
    for v in values:
        if v not in seen:
            seen.append(v)
    return seen


class MovieCreate(SQLModel):
    """
    Payload for adding a catalog entry (admin).
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(max_length=255)
    year: int = Field(ge=MIN_MOVIE_YEAR, le=MAX_MOVIE_YEAR)
    genre: str = Field(max_length=50)
    qualities: list[Quality] = Field(default_factory=list)
    image_url: str | None = None
    is_available: bool = True

    @field_validator("title", "genre")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v

    @field_validator("qualities")
    @classmethod
    def unique_qualities(cls, v: list[str]) -> list[str]:
        return _dedupe(v)

    @field_validator("image_url")
    @classmethod
    def normalize_image_url(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class MovieUpdate(SQLModel):
    """
    Partial update of a catalog entry (admin).
    `image_url` may be set to an empty string to clear the poster.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=255)
    year: int | None = Field(default=None, ge=MIN_MOVIE_YEAR, le=MAX_MOVIE_YEAR)
    genre: str | None = Field(default=None, max_length=50)
    qualities: list[Quality] | None = None
    image_url: str | None = None
    is_available: bool | None = None

    @field_validator("title", "genre")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v

    @field_validator("qualities")
    @classmethod
    def unique_qualities(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        return _dedupe(v)


class MovieRead(SQLModel):
    """
    Catalog entry representation for clients.
    """

    id: uuid.UUID
    title: str
    year: int
    genre: str
    qualities: list[str]
    image_url: str | None
    is_available: bool
    added_at: datetime


class MovieAvailabilityToggle(SQLModel):
    id: uuid.UUID
    is_available: bool
