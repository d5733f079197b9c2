# app/services/movie_service.py
import logging
import uuid

from sqlmodel import Session

from app.core.errors import MovieNotFound, ValidationError
from app.core.storage_utils import delete_public_url, upload_to_storage
from app.models.movie import Movie
from app.repositories.movie_repo import MovieRepository
from app.schemas.movie import MovieAvailabilityToggle, MovieCreate, MovieUpdate

logger = logging.getLogger(__name__)


# --- Poster config ---

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB per poster

ALLOWED_IMAGE_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


class MovieService:
    """
    Business logic for the movie catalog.

    Responsibilities:
      - filtered listing (title substring, genre, availability)
      - create / partial update / delete / availability toggle
      - poster upload orchestration with Supabase Storage

    Admin-only operations are guarded at the router via require_admin.
    """

    def __init__(self, repo: MovieRepository):
        self.repo = repo

    # ----- Helpers -----

    @staticmethod
    def _validate_and_get_ext(content_type: str, file_bytes: bytes) -> str:
        if content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
            raise ValidationError("Unsupported image type. Allowed: JPEG, PNG, WEBP.")

        if not file_bytes:
            raise ValidationError("Image file is empty.")

        if len(file_bytes) > MAX_IMAGE_BYTES:
            raise ValidationError("Image too large (max 5MB).")

        return ALLOWED_IMAGE_CONTENT_TYPES[content_type]

    # ----- Queries -----

    def list_movies(
        self,
        session: Session,
        search: str | None = None,
        genre: str | None = None,
        is_available: bool | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Movie]:
        """
        Case-insensitive title substring, exact genre, exact availability;
        most recently added first.
        """
        search = search.strip() if search else None
        return self.repo.list_movies(
            session,
            search=search or None,
            genre=genre or None,
            is_available=is_available,
            skip=skip,
            limit=limit,
        )

    def get_movie(self, session: Session, movie_id: uuid.UUID) -> Movie:
        movie = self.repo.get_by_id(session, movie_id)
        if not movie:
            raise MovieNotFound()
        return movie

    def list_genres(self, session: Session) -> list[str]:
        """Distinct genres, lexicographically sorted."""
        return self.repo.list_genres(session)

    # ----- Mutations -----

    def create_movie(self, session: Session, payload: MovieCreate) -> Movie:
        movie = Movie(
            title=payload.title,
            year=payload.year,
            genre=payload.genre,
            qualities=list(payload.qualities),
            image_url=payload.image_url,
            is_available=payload.is_available,
        )
        movie = self.repo.create(session, movie)
        logger.info("Movie added: movie_id=%s", movie.id)
        return movie

    def update_movie(
        self,
        session: Session,
        movie_id: uuid.UUID,
        payload: MovieUpdate,
    ) -> Movie:
        """
        Partial update of a movie.
        """
        movie = self.get_movie(session, movie_id)

        if payload.title is not None:
            movie.title = payload.title

        if payload.year is not None:
            movie.year = payload.year

        if payload.genre is not None:
            movie.genre = payload.genre

        if payload.qualities is not None:
            movie.qualities = list(payload.qualities)

        if "image_url" in payload.model_fields_set:
            image_url = (payload.image_url or "").strip()
            movie.image_url = image_url or None

        if payload.is_available is not None:
            movie.is_available = payload.is_available

        return self.repo.update(session, movie)

    def toggle_availability(
        self,
        session: Session,
        movie_id: uuid.UUID,
    ) -> MovieAvailabilityToggle:
        movie = self.get_movie(session, movie_id)
        movie.is_available = not movie.is_available
        movie = self.repo.update(session, movie)
        return MovieAvailabilityToggle(id=movie.id, is_available=movie.is_available)

    def delete_movie(self, session: Session, movie_id: uuid.UUID) -> None:
        """
        Delete a movie and, best-effort, its stored poster.
        """
        movie = self.get_movie(session, movie_id)
        if movie.image_url:
            delete_public_url(movie.image_url)
        self.repo.delete(session, movie)
        logger.info("Movie deleted: movie_id=%s", movie_id)

    # ----- Poster -----

    def set_poster(
        self,
        session: Session,
        movie_id: uuid.UUID,
        content_type: str,
        file_bytes: bytes,
    ) -> Movie:
        """
        Upload or replace the poster for a movie.

        - Validates content type + size.
        - Deletes old poster from Storage if it lives in our bucket.
        - Uploads new poster to deterministic path:
            movies/<movie_id>/poster.<ext>
        """
        movie = self.get_movie(session, movie_id)
        ext = self._validate_and_get_ext(content_type, file_bytes)

        if movie.image_url:
            delete_public_url(movie.image_url)

        path = f"movies/{movie.id}/poster.{ext}"
        movie.image_url = upload_to_storage(path, file_bytes, content_type)
        return self.repo.update(session, movie)
