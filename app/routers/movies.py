# app/routers/movies.py
import uuid

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.repositories.movie_repo import MovieRepository
from app.schemas.movie import (
    MovieAvailabilityToggle,
    MovieCreate,
    MovieRead,
    MovieUpdate,
)
from app.services.movie_service import MovieService

router = APIRouter(prefix="/movies", tags=["Movies"])

repo = MovieRepository()
service = MovieService(repo)


# -------- Public endpoints --------


@router.get("", response_model=list[MovieRead])
def list_movies(
    session: Session = Depends(get_session),
    search: str | None = None,
    genre: str | None = None,
    is_available: bool | None = None,
    skip: int = 0,
    limit: int = 100,
):
    """
    List catalog entries, most recently added first.

    - `search`: case-insensitive title substring
    - `genre`: exact genre
    - `is_available`: exact availability
    """
    return service.list_movies(
        session,
        search=search,
        genre=genre,
        is_available=is_available,
        skip=skip,
        limit=limit,
    )


@router.get("/genres", response_model=list[str])
def list_genres(session: Session = Depends(get_session)):
    """
    Distinct genres in the catalog, sorted.
    """
    return service.list_genres(session)


@router.get("/{movie_id}", response_model=MovieRead)
def get_movie(
    movie_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Get a single movie by id.
    """
    return service.get_movie(session, movie_id)


# -------- Admin endpoints --------


@router.post(
    "",
    response_model=MovieRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_movie(
    payload: MovieCreate,
    session: Session = Depends(get_session),
):
    """
    Add a movie to the catalog (admin only).
    """
    return service.create_movie(session, payload)


@router.patch(
    "/{movie_id}",
    response_model=MovieRead,
    dependencies=[Depends(require_admin)],
)
def update_movie(
    movie_id: uuid.UUID,
    payload: MovieUpdate,
    session: Session = Depends(get_session),
):
    """
    Partially update a movie (admin only).
    """
    return service.update_movie(session, movie_id, payload)


@router.post(
    "/{movie_id}/toggle-availability",
    response_model=MovieAvailabilityToggle,
    dependencies=[Depends(require_admin)],
)
def toggle_availability(
    movie_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Flip a movie's availability flag (admin only).
    """
    return service.toggle_availability(session, movie_id)


@router.delete(
    "/{movie_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_movie(
    movie_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Remove a movie from the catalog (admin only).
    """
    service.delete_movie(session, movie_id)


@router.post(
    "/{movie_id}/poster",
    response_model=MovieRead,
    dependencies=[Depends(require_admin)],
)
async def upload_poster(
    movie_id: uuid.UUID,
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
):
    """
    Upload or replace a movie's poster in Supabase Storage (admin only).

    Accepts JPEG, PNG, WEBP up to 5MB.
    """
    file_bytes = await file.read()
    return service.set_poster(
        session,
        movie_id,
        content_type=file.content_type or "",
        file_bytes=file_bytes,
    )
