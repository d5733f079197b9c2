# app/repositories/movie_repo.py
import uuid

from sqlalchemy import String, func
from sqlmodel import Session, select

from app.models.movie import Movie


class MovieRepository:
    """
    Data access layer for the movie catalog.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, movie_id: uuid.UUID) -> Movie | None:
        return session.get(Movie, movie_id)

    def list_movies(
        self,
        session: Session,
        search: str | None = None,
        genre: str | None = None,
        is_available: bool | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Movie]:
        stmt = select(Movie)
        if search:
            stmt = stmt.where(
                func.lower(Movie.title, type_=String).contains(search.lower(), autoescape=True)
            )
        if genre:
            stmt = stmt.where(Movie.genre == genre)
        if is_available is not None:
            stmt = stmt.where(Movie.is_available == is_available)
        stmt = stmt.order_by(Movie.added_at.desc()).offset(skip).limit(limit)
        return list(session.exec(stmt).all())

    def list_genres(self, session: Session) -> list[str]:
        stmt = select(Movie.genre).distinct()
        return sorted(session.exec(stmt).all())

    def create(self, session: Session, movie: Movie) -> Movie:
        session.add(movie)
        session.commit()
        session.refresh(movie)
        return movie

    def update(self, session: Session, movie: Movie) -> Movie:
        session.add(movie)
        session.commit()
        session.refresh(movie)
        return movie

    def delete(self, session: Session, movie: Movie) -> None:
        session.delete(movie)
        session.commit()
